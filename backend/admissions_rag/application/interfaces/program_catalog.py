"""Abstract interface (port) for the degree program catalog."""

from abc import ABC, abstractmethod

from admissions_rag.domain.entities import Program


class ProgramCatalog(ABC):
    """Port for reading catalog entries used by the match scorer."""

    @abstractmethod
    async def list_programs(self) -> list[Program]:
        ...

    @abstractmethod
    async def get_program(self, program_id: str) -> Program | None:
        ...
