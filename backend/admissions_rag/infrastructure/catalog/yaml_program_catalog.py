"""Program catalog loaded from a YAML file on first use."""

import logging
import threading
from pathlib import Path

import yaml

from admissions_rag.application.interfaces.program_catalog import ProgramCatalog
from admissions_rag.domain.entities import Program

logger = logging.getLogger(__name__)


class YamlProgramCatalog(ProgramCatalog):
    """Infrastructure adapter — reads ``programs:`` entries from a YAML file.

    Expected layout::

        programs:
          - id: "1"
            name: Bachelor of Computer Science
            minimum_cgpa: 3.0
            required_subjects: [Mathematics, Physics]
            keywords: [programming, software]
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._programs: list[Program] | None = None
        self._lock = threading.Lock()

    async def list_programs(self) -> list[Program]:
        return list(self._load())

    async def get_program(self, program_id: str) -> Program | None:
        for program in self._load():
            if program.id == str(program_id):
                return program
        return None

    def _load(self) -> list[Program]:
        with self._lock:
            if self._programs is None:
                self._programs = self._parse()
            return self._programs

    def _parse(self) -> list[Program]:
        if not self._path.exists():
            logger.warning("Program catalog %s not found — catalog is empty", self._path)
            return []

        data = yaml.safe_load(self._path.read_text("utf-8")) or {}
        programs: list[Program] = []
        seen: set[str] = set()

        for raw in data.get("programs", []):
            program = Program(
                id=str(raw["id"]),
                name=raw["name"],
                description=raw.get("description", ""),
                faculty=raw.get("faculty", ""),
                duration=raw.get("duration", ""),
                minimum_cgpa=float(raw.get("minimum_cgpa", 0.0)),
                required_subjects=tuple(raw.get("required_subjects", [])),
                keywords=tuple(raw.get("keywords", [])),
            )
            if program.id in seen:
                raise ValueError(f"Duplicate program id '{program.id}' in {self._path}")
            seen.add(program.id)
            programs.append(program)

        logger.info("Loaded %d programs from %s", len(programs), self._path)
        return programs
