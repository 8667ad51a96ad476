import argparse

import uvicorn

from src.config.settings import settings


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="surgical-fs-serve",
        description="Serve the surgical edit HTTP API.",
    )
    parser.add_argument("--host", default=settings.host, help="Bind address (HOST)")
    parser.add_argument("--port", type=int, default=settings.port, help="Port (PORT)")
    parser.add_argument(
        "--reload", action="store_true", default=settings.reload, help="Reload on code changes"
    )
    args = parser.parse_args(argv)
    # Run FastAPI app from src.main:app
    uvicorn.run(
        "src.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )  # type: ignore[arg-type]
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
