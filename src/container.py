"""
Dependency injection container for managing application dependencies.
"""

import logging

from src.adapters.files.local_fs_adapter import LocalFileSystemAdapter
from src.adapters.transactions.backup_transaction import BackupTransaction
from src.config.settings import settings
from src.ports.files.file_repository_port import FileRepositoryPort
from src.ports.llm.tools_port import ToolsHandlerPort
from src.ports.transactions.transaction_port import TransactionPort
from src.use_cases.edits.batch_edit import BatchEditUseCase
from src.use_cases.edits.edit_lines import EditLinesUseCase
from src.use_cases.edits.preview_edit import PreviewEditUseCase
from src.use_cases.edits.read_file_lines import ReadFileLinesUseCase
from src.use_cases.edits.surgical_edit import SurgicalEditUseCase
from src.use_cases.edits.transactional_executor import TransactionalEditExecutor
from src.use_cases.tools.edit_tools import EditToolsHandler
from src.utils.workspace import PathValidator


class DependencyContainer:
    """
    Container for managing application dependencies using dependency injection.
    """

    def __init__(self):
        self._instances = {}
        self._logger = logging.getLogger(__name__)

    def get_file_repository(self) -> FileRepositoryPort:
        """
        Get file repository adapter instance.

        Returns:
            FileRepositoryPort implementation
        """
        if "file_repository" not in self._instances:
            self._instances["file_repository"] = LocalFileSystemAdapter(self._logger)
        return self._instances["file_repository"]

    def get_path_validator(self) -> PathValidator:
        """
        Get the path validator built from the configured allow-list.

        Returns:
            PathValidator bound to settings.allowed_directories
        """
        if "path_validator" not in self._instances:
            self._instances["path_validator"] = PathValidator(
                settings.allowed_directories
            )
        return self._instances["path_validator"]

    def create_transaction(self, working_dir: str) -> TransactionPort:
        """Build a fresh transaction; one per edit operation."""
        return BackupTransaction(working_dir, logger=self._logger)

    def get_edit_executor(self) -> TransactionalEditExecutor:
        """
        Get the transactional edit executor shared by the edit use cases.

        Returns:
            Configured TransactionalEditExecutor
        """
        if "edit_executor" not in self._instances:
            self._instances["edit_executor"] = TransactionalEditExecutor(
                self.get_path_validator(),
                self.get_file_repository(),
                self.create_transaction,
                logger=self._logger,
            )
        return self._instances["edit_executor"]

    def get_surgical_edit_use_case(self) -> SurgicalEditUseCase:
        """
        Get surgical edit use case with injected dependencies.

        Returns:
            Configured SurgicalEditUseCase
        """
        if "surgical_edit_use_case" not in self._instances:
            self._instances["surgical_edit_use_case"] = SurgicalEditUseCase(
                self.get_edit_executor(), self._logger
            )
        return self._instances["surgical_edit_use_case"]

    def get_preview_edit_use_case(self) -> PreviewEditUseCase:
        """
        Get preview edit use case with injected dependencies.

        Returns:
            Configured PreviewEditUseCase
        """
        if "preview_edit_use_case" not in self._instances:
            self._instances["preview_edit_use_case"] = PreviewEditUseCase(
                self.get_edit_executor(), self.get_file_repository(), self._logger
            )
        return self._instances["preview_edit_use_case"]

    def get_edit_lines_use_case(self) -> EditLinesUseCase:
        """
        Get line edit use case with injected dependencies.

        Returns:
            Configured EditLinesUseCase
        """
        if "edit_lines_use_case" not in self._instances:
            self._instances["edit_lines_use_case"] = EditLinesUseCase(
                self.get_edit_executor(), self._logger
            )
        return self._instances["edit_lines_use_case"]

    def get_read_file_lines_use_case(self) -> ReadFileLinesUseCase:
        """
        Get numbered read use case with injected dependencies.

        Returns:
            Configured ReadFileLinesUseCase
        """
        if "read_file_lines_use_case" not in self._instances:
            self._instances["read_file_lines_use_case"] = ReadFileLinesUseCase(
                self.get_edit_executor(), self.get_file_repository(), self._logger
            )
        return self._instances["read_file_lines_use_case"]

    def get_batch_edit_use_case(self) -> BatchEditUseCase:
        """
        Get batch edit use case with injected dependencies.

        Returns:
            Configured BatchEditUseCase
        """
        if "batch_edit_use_case" not in self._instances:
            self._instances["batch_edit_use_case"] = BatchEditUseCase(
                self.get_edit_executor(), self._logger
            )
        return self._instances["batch_edit_use_case"]

    def get_edit_tools_handler(self) -> ToolsHandlerPort:
        """
        Registry of the 'surgical.*' tools backed by the edit use cases.
        """
        if "edit_tools_handler" not in self._instances:
            self._instances["edit_tools_handler"] = EditToolsHandler(
                self.get_surgical_edit_use_case(),
                self.get_preview_edit_use_case(),
                self.get_edit_lines_use_case(),
                self.get_read_file_lines_use_case(),
                self.get_batch_edit_use_case(),
                logger=self._logger,
            )
        return self._instances["edit_tools_handler"]

    def reset(self):
        """Reset all instances (useful for testing)."""
        self._instances.clear()


# Global container instance
container = DependencyContainer()
