"""Code generator base classes that write their output to a file or stdout."""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import Any, TextIO


class CodeGenerator(ABC):
    """Generates output for a module of functions and global variables."""

    def __init__(self, module: Any) -> None:
        self.module = module

    def run(self, out_file_name: str = "") -> bool:
        """Generate into the named file, or to standard output when no name is given."""
        if out_file_name:
            with open(out_file_name, "w", encoding="utf-8") as out:
                return self.generate(out)
        return self.generate(sys.stdout)

    @abstractmethod
    def generate(self, out: TextIO) -> bool:
        """Write the generated code to out and report success."""


class CodeGeneratorAsm(CodeGenerator):
    """Assembly generator: header, data section, then code for each function.

    The module is expected to expose ``functions``, each with an
    ``is_builtin`` attribute; built-in functions get no code.
    """

    def __init__(self, module: Any) -> None:
        super().__init__(module)
        # Label numbering is per file, not per function.
        self.label_index = 0

    def generate(self, out: TextIO) -> bool:
        """Write the header, the data section and the code section."""
        self.gen_header(out)
        self.gen_data_section(out)
        self.label_index = 0
        for func in self.module.functions:
            if not func.is_builtin:
                self.gen_function(out, func)
        return True

    @abstractmethod
    def gen_header(self, out: TextIO) -> None:
        """Write the assembly header."""

    @abstractmethod
    def gen_data_section(self, out: TextIO) -> None:
        """Write the global variables, initialised and uninitialised."""

    @abstractmethod
    def gen_function(self, out: TextIO, func: Any) -> None:
        """Write the instructions of one function to the code section."""