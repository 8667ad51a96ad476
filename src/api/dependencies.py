"""
FastAPI dependency functions for retrieving use cases from the container.
"""

from src.container import container
from src.use_cases.edits.batch_edit import BatchEditUseCase
from src.use_cases.edits.edit_lines import EditLinesUseCase
from src.use_cases.edits.preview_edit import PreviewEditUseCase
from src.use_cases.edits.read_file_lines import ReadFileLinesUseCase
from src.use_cases.edits.surgical_edit import SurgicalEditUseCase


def get_surgical_edit_uc() -> SurgicalEditUseCase:
    """
    Get the surgical edit use case from the container.

    Returns:
        SurgicalEditUseCase: The surgical edit use case instance
    """
    return container.get_surgical_edit_use_case()


def get_preview_edit_uc() -> PreviewEditUseCase:
    """
    Get the preview edit use case from the container.

    Returns:
        PreviewEditUseCase: The preview edit use case instance
    """
    return container.get_preview_edit_use_case()


def get_edit_lines_uc() -> EditLinesUseCase:
    """
    Get the line edit use case from the container.

    Returns:
        EditLinesUseCase: The line edit use case instance
    """
    return container.get_edit_lines_use_case()


def get_read_file_lines_uc() -> ReadFileLinesUseCase:
    """
    Get the numbered read use case from the container.

    Returns:
        ReadFileLinesUseCase: The numbered read use case instance
    """
    return container.get_read_file_lines_use_case()


def get_batch_edit_uc() -> BatchEditUseCase:
    """
    Get the batch edit use case from the container.

    Returns:
        BatchEditUseCase: The batch edit use case instance
    """
    return container.get_batch_edit_use_case()
