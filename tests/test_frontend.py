import pytest

from minic.ast import AstOperatorType
from minic.frontend import FrontEndError, main, parse_file, parse_source


def test_parse_source_builds_tree():
    root = parse_source("int main() { return 3; }")
    assert root.node_type == AstOperatorType.COMPILE_UNIT
    assert root.sons[0].name == "main"
    assert root.sons[0].sons[3].sons[0].sons[0].integer_val == 3


def test_parse_source_syntax_error():
    with pytest.raises(FrontEndError):
        parse_source("int main( { }")


def test_parse_source_lexical_error():
    with pytest.raises(FrontEndError):
        parse_source("int main() { return 1 * 2; }")


def test_parse_file_reads_file(tmp_path):
    src = tmp_path / "prog.c"
    src.write_text("int a; int main() { a = 1; return a; }", encoding="utf-8")
    root = parse_file(str(src))
    assert [s.node_type for s in root.sons] == [
        AstOperatorType.DECL_STMT,
        AstOperatorType.FUNC_DEF,
    ]


def test_parse_file_missing(tmp_path):
    with pytest.raises(FrontEndError):
        parse_file(str(tmp_path / "missing.c"))


def test_main_writes_graph(tmp_path):
    src = tmp_path / "prog.c"
    src.write_text("int main() { return 1 + 2; }", encoding="utf-8")
    out = tmp_path / "ast.dot"
    assert main([str(src), "-o", str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith("digraph ast {")
    assert "func-def" in text


def test_main_without_output(tmp_path):
    src = tmp_path / "prog.c"
    src.write_text("int main() { }", encoding="utf-8")
    assert main([str(src)]) == 0


def test_main_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.c")]) == 1
    assert "nope.c" in capsys.readouterr().err


def test_main_syntax_error(tmp_path):
    src = tmp_path / "bad.c"
    src.write_text("int main() { return }", encoding="utf-8")
    assert main([str(src)]) == 1