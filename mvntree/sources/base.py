from abc import ABC, abstractmethod
from typing import List, Optional

from mvntree.core.builder import parse
from mvntree.core.model import DependencyNode


class ReportSource(ABC):
    """Base class inherited by everything that can produce dependency:tree output."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Friendly source name (e.g., Maven, report file)."""
        pass

    @property
    @abstractmethod
    def lock_files(self) -> List[str]:
        """List of exact filenames that make this source usable."""
        pass

    def detect(self, files: List[str]) -> bool:
        """
        Returns True if this source supports the current directory.
        Default implementation checks for exact match in lock_files.
        """
        for lock_file in self.lock_files:
            if lock_file in files:
                return True
        return False

    @abstractmethod
    def read_report(self) -> str:
        pass

    def get_dependencies(self) -> Optional[DependencyNode]:
        return parse(self.read_report())
