"""DWARF v1 function importer - rebuild functions and member ownership from .debug sections."""

from .core import DebugInfoParser
from .domain.services.importing import FunctionImporter, ProgramImporter
from .infrastructure.config import Config
from .main import main

__all__ = ["Config", "DebugInfoParser", "FunctionImporter", "ProgramImporter", "main"]
