from dataclasses import dataclass, field

import pytest

from minic.codegen import CodeGenerator, CodeGeneratorAsm


@dataclass
class StubFunction:
    name: str
    is_builtin: bool = False


@dataclass
class StubModule:
    functions: list = field(default_factory=list)


class RecordingGenerator(CodeGeneratorAsm):
    def gen_header(self, out):
        out.write("header\n")

    def gen_data_section(self, out):
        out.write("data\n")

    def gen_function(self, out, func):
        out.write(f"{func.name}:{self.label_index}\n")
        self.label_index += 1


def _module():
    return StubModule(
        [StubFunction("main"), StubFunction("putint", True), StubFunction("helper")]
    )


def test_sections_in_order_and_builtins_skipped(tmp_path):
    path = tmp_path / "out.s"
    gen = RecordingGenerator(_module())
    result = CodeGenerator.run(gen, str(path))
    assert result is True
    assert path.read_text(encoding="utf-8").splitlines() == [
        "header",
        "data",
        "main:0",
        "helper:1",
    ]


def test_label_index_restarts_each_run(tmp_path):
    gen = RecordingGenerator(_module())
    first = tmp_path / "a.s"
    second = tmp_path / "b.s"
    CodeGenerator.run(gen, str(first))
    CodeGenerator.run(gen, str(second))
    assert first.read_text(encoding="utf-8") == second.read_text(encoding="utf-8")
    assert gen.label_index == 2


def test_empty_name_writes_to_stdout(capsys):
    gen = RecordingGenerator(StubModule([StubFunction("f")]))
    CodeGenerator.run(gen, "")
    assert capsys.readouterr().out == "header\ndata\nf:0\n"


def test_unwritable_path_raises(tmp_path):
    missing = tmp_path / "no_such_dir" / "out.s"
    gen = RecordingGenerator(_module())
    with pytest.raises(OSError):
        CodeGenerator.run(gen, str(missing))


def test_abstract_generators_cannot_be_created():
    with pytest.raises(TypeError):
        CodeGenerator(_module())
    with pytest.raises(TypeError):
        CodeGeneratorAsm(_module())