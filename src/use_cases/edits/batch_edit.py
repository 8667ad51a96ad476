"""
Use case for applying several find/replace edits atomically.
"""

import json
import logging
from typing import Any, Optional, Sequence

from src.entities.EditRequest import EditRequest
from src.entities.EditResult import EditResult, ErrorKind, PlannedEdit
from src.exceptions import BatchRequestError
from src.use_cases.edits.surgical_edit import plan_find_replace
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor


def parse_edits(edits_json: str) -> list[EditRequest]:
    """
    Decode a JSON array of {"path", "find", "replace"} objects.

    Raises:
        BatchRequestError: If the payload is not a non-empty list of edits
    """
    try:
        data: Any = json.loads(edits_json)
    except (TypeError, json.JSONDecodeError) as e:
        raise BatchRequestError(f"Invalid edits JSON: {e}") from e
    if not isinstance(data, list):
        raise BatchRequestError("Edits JSON must be an array of edit objects")
    if not data:
        raise BatchRequestError("No edits provided")
    try:
        return [EditRequest.from_dict(item) for item in data]
    except ValueError as e:
        raise BatchRequestError(str(e)) from e


def _plan_request(request: EditRequest, content: str) -> PlannedEdit:
    return plan_find_replace(request.find, request.replace)(content)


class BatchEditUseCase:
    """Use case for multi-file edits with all-or-nothing semantics."""

    def __init__(
        self,
        executor: TransactionalEditExecutor,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the use case.

        Args:
            executor: Transactional executor running the batch
            logger: Logger instance to use for logging
        """
        self._executor = executor
        self._logger = logger or logging.getLogger(__name__)

    def execute(self, requests: Sequence[EditRequest]) -> EditResult:
        """
        Apply every edit in order, or none of them.

        Args:
            requests: Ordered edits; a later edit sees the output of earlier ones on the same file

        Returns:
            EditResult listing the strategy used per file, or the first failure
        """
        self._logger.info(f"Batch edit requested: {len(requests)} edits")
        return self._executor.run_batch(list(requests), _plan_request)

    def execute_json(self, edits_json: str) -> EditResult:
        """
        Decode and apply a JSON batch.

        Args:
            edits_json: JSON array of {"path", "find", "replace"} objects

        Returns:
            EditResult for the batch; malformed input is an invalid_request failure
        """
        try:
            requests = parse_edits(edits_json)
        except BatchRequestError as e:
            self._logger.warning(f"Rejected batch request: {e}")
            return EditResult.failure(ErrorKind.INVALID_REQUEST, f"Error: {e}")
        return self.execute(requests)
