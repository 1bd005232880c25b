"""
Command-line driver tests.

The preprocessor and linker are stubbed out so these run without gcc:
``preprocess`` returns the file unchanged and ``assemble_and_link``
records its arguments.
"""

import pytest
import x86cc
from x86_compiler.toolchain import ToolchainError


RETURN_2 = "int main(void) { return 2; }\n"


@pytest.fixture
def no_cpp(monkeypatch):
    monkeypatch.setattr(x86cc, "preprocess", lambda path, cc="gcc": path.read_text())


@pytest.fixture
def linked(monkeypatch):
    calls = []

    def fake_link(asm_path, exe_path, cc="gcc"):
        calls.append((asm_path, exe_path, asm_path.read_text()))

    monkeypatch.setattr(x86cc, "assemble_and_link", fake_link)
    return calls


def _source(tmp_path, text: str = RETURN_2):
    path = tmp_path / "prog.c"
    path.write_text(text)
    return path


# ─── Stages ────────────────────────────────

@pytest.mark.usefixtures("no_cpp")
class TestStages:
    def test_lex_only(self, tmp_path):
        assert x86cc.main([str(_source(tmp_path)), "--lex"]) == x86cc.EXIT_OK

    def test_parse_only(self, tmp_path):
        assert x86cc.main([str(_source(tmp_path)), "--parse"]) == x86cc.EXIT_OK

    def test_codegen_writes_nothing(self, tmp_path):
        src = _source(tmp_path)
        assert x86cc.main([str(src), "--codegen"]) == x86cc.EXIT_OK
        assert not (tmp_path / "prog.s").exists()

    def test_emit_assembly(self, tmp_path):
        src = _source(tmp_path)
        assert x86cc.main([str(src), "-S"]) == x86cc.EXIT_OK
        text = (tmp_path / "prog.s").read_text()
        assert ".globl main" in text
        assert ".note.GNU-stack" in text

    def test_emit_assembly_for_macos(self, tmp_path):
        src = _source(tmp_path)
        out = tmp_path / "out.s"
        assert x86cc.main([str(src), "-S", "--target", "macos", "-o", str(out)]) == x86cc.EXIT_OK
        text = out.read_text()
        assert "_main:" in text
        assert ".note.GNU-stack" not in text

    def test_full_build_links_and_cleans_up(self, tmp_path, linked):
        src = _source(tmp_path)
        assert x86cc.main([str(src)]) == x86cc.EXIT_OK
        (asm_path, exe_path, text), = linked
        assert asm_path.suffix == ".s"
        assert asm_path.parent != tmp_path
        assert exe_path == tmp_path / "prog"
        assert "movl $2, %eax" in text
        assert not asm_path.exists()

    def test_full_build_leaves_neighbouring_assembly_alone(self, tmp_path, linked):
        src = _source(tmp_path)
        user_asm = tmp_path / "prog.s"
        user_asm.write_text("# hand written\n")
        assert x86cc.main([str(src)]) == x86cc.EXIT_OK
        assert user_asm.read_text() == "# hand written\n"

    def test_output_may_not_replace_input(self, tmp_path, linked, capsys):
        src = tmp_path / "prog"
        src.write_text(RETURN_2)
        assert x86cc.main([str(src)]) == x86cc.EXIT_IO_ERROR
        assert src.read_text() == RETURN_2
        assert linked == []
        assert "would overwrite the input" in capsys.readouterr().err

    def test_emit_may_not_replace_input(self, tmp_path):
        src = _source(tmp_path)
        assert x86cc.main([str(src), "-S", "-o", str(src)]) == x86cc.EXIT_IO_ERROR
        assert src.read_text() == RETURN_2

    def test_stage_flags_are_exclusive(self, tmp_path):
        with pytest.raises(SystemExit):
            x86cc.main([str(_source(tmp_path)), "--lex", "--parse"])


# ─── Debug dumps ───────────────────────────

@pytest.mark.usefixtures("no_cpp")
class TestDumps:
    def test_tokens(self, tmp_path, capsys):
        assert x86cc.main([str(_source(tmp_path)), "--tokens"]) == x86cc.EXIT_OK
        out = capsys.readouterr().out.splitlines()
        assert len(out) == 10
        assert out[0].startswith("Token(KW_INT")

    def test_ast(self, tmp_path, capsys):
        assert x86cc.main([str(_source(tmp_path)), "--ast"]) == x86cc.EXIT_OK
        out = capsys.readouterr().out
        assert out.startswith("Program(\n")
        assert "ConstantInt(2)" in out


# ─── Failures ──────────────────────────────

class TestFailures:
    def test_missing_file(self, tmp_path, capsys):
        assert x86cc.main([str(tmp_path / "nope.c")]) == x86cc.EXIT_IO_ERROR
        assert "File not found" in capsys.readouterr().err

    @pytest.mark.usefixtures("no_cpp")
    def test_lexer_error(self, tmp_path, capsys):
        src = _source(tmp_path, "int main(void) { return 123bar; }")
        assert x86cc.main([str(src), "--lex"]) == x86cc.EXIT_LEXER_ERROR
        err = capsys.readouterr().err
        assert "line 1, col 27" in err
        assert "invalid suffix" in err

    @pytest.mark.usefixtures("no_cpp")
    def test_lexer_error_while_parsing(self, tmp_path):
        src = _source(tmp_path, "int main(void) { return 2@; }")
        assert x86cc.main([str(src), "--parse"]) == x86cc.EXIT_LEXER_ERROR

    @pytest.mark.usefixtures("no_cpp")
    def test_syntax_error(self, tmp_path, capsys):
        src = _source(tmp_path, "int main(void) {\n    return 2\n}\n")
        assert x86cc.main([str(src), "-S"]) == x86cc.EXIT_PARSE_ERROR
        err = capsys.readouterr().err
        assert "line 3, col 1\n}\n^ expected ';', found '}'" in err
        assert not (tmp_path / "prog.s").exists()

    def test_preprocessor_failure(self, tmp_path, monkeypatch):
        def broken(path, cc="gcc"):
            raise ToolchainError("gcc: command not found")

        monkeypatch.setattr(x86cc, "preprocess", broken)
        assert x86cc.main([str(_source(tmp_path))]) == x86cc.EXIT_TOOLCHAIN_ERROR

    @pytest.mark.usefixtures("no_cpp")
    def test_link_failure_still_removes_assembly(self, tmp_path, monkeypatch):
        written = []

        def broken(asm_path, exe_path, cc="gcc"):
            written.append(asm_path)
            raise ToolchainError("ld failed")

        monkeypatch.setattr(x86cc, "assemble_and_link", broken)
        assert x86cc.main([str(_source(tmp_path))]) == x86cc.EXIT_TOOLCHAIN_ERROR
        asm_path, = written
        assert not asm_path.exists()
