from __future__ import annotations

from pathlib import Path

import pytest

from lpnc.main import main

from tests.helpers import DEMO, DEMO_ASM, program


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_default_source_and_output(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_text(DEMO)

    assert main(['lpnc']) == 0
    assert (workdir / 'assembly.asm').read_text() == DEMO_ASM

    out = capsys.readouterr().out.splitlines()
    assert out[0] == '; program: DEMO'
    assert out[-1] == 'STA RES'
    assert 'LDC 5' in out


def test_source_and_output_from_argv(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'demo.lpn').write_text(DEMO)

    assert main(['lpnc', 'demo.lpn', '-o', 'demo.asm', '--dump']) == 0
    assert (workdir / 'demo.asm').read_text() == DEMO_ASM
    assert not (workdir / 'assembly.asm').exists()
    assert '-- INSTRS --' in capsys.readouterr().out


def test_token_dump(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_text(DEMO)

    assert main(['lpnc', '--tokens']) == 0
    out = capsys.readouterr().out
    assert '-- TOKENS --' in out
    assert "PROGRAM_KW('PROGRAMA')" in out


def test_unknown_character_writes_nothing(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_text(program('A = 1 @ 2'))

    assert main(['lpnc']) != 0
    assert not (workdir / 'assembly.asm').exists()
    assert 'UNKNOWN' in capsys.readouterr().err


def test_lowering_failure_writes_nothing(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_text(program(res='A + B * C'))

    assert main(['lpnc']) == 1
    assert not (workdir / 'assembly.asm').exists()
    assert 'no lowering rule' in capsys.readouterr().err


def test_missing_source(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(['lpnc', 'nope.lpn']) == 1
    assert 'cannot read "nope.lpn"' in capsys.readouterr().err


def test_bad_option(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(['lpnc', '--what']) == 1
    assert 'unknown argument' in capsys.readouterr().err


def test_error_location_is_reported(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_text(program('A 1'))

    assert main(['lpnc']) == 1
    assert 'programa.lpn:3:3' in capsys.readouterr().err


def test_source_that_is_not_utf8(workdir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    (workdir / 'programa.lpn').write_bytes(b'PROGRAMA "X\xe9":\nINICIO\nRES = A\nFIM\n')

    assert main(['lpnc']) == 1
    assert not (workdir / 'assembly.asm').exists()
    assert 'byte 0xe9 at offset 11 is not valid utf-8' in capsys.readouterr().err


def test_failed_write_leaves_no_artifacts(
    workdir: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    (workdir / 'programa.lpn').write_text(DEMO)

    def failing_replace(src: str, dst: str) -> None:
        raise OSError(28, 'No space left on device')

    monkeypatch.setattr('lpnc.unit.os.replace', failing_replace)

    assert main(['lpnc']) == 1
    assert sorted(p.name for p in workdir.iterdir()) == ['programa.lpn']
    assert 'cannot write "assembly.asm": No space left on device' in capsys.readouterr().err


def test_output_replaces_previous_file(workdir: Path) -> None:
    (workdir / 'programa.lpn').write_text(DEMO)
    (workdir / 'assembly.asm').write_text('stale\n')

    assert main(['lpnc']) == 0
    assert (workdir / 'assembly.asm').read_text() == DEMO_ASM
    assert sorted(p.name for p in workdir.iterdir()) == ['assembly.asm', 'programa.lpn']
