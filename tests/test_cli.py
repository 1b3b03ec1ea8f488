from __future__ import annotations

import json

import pytest

from vessel.__main__ import main
from vessel.bench import BenchModule, Profiler
from vessel.benchmarks import BUILTIN_MODULES
from vessel.errors import BenchmarkError

pytestmark = pytest.mark.unit


def test_summary_output_for_selected_module(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["option", "--iterations", "2", "--warmup", "0"])

    out = capsys.readouterr().out
    assert code == 0
    assert out.startswith("option: 2 iterations (0 warmup)")
    assert "outcome:" not in out


def test_json_output_for_all_modules(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["--iterations", "1", "--warmup", "0", "--seed", "3", "--json"])

    data = json.loads(capsys.readouterr().out)
    assert code == 0
    assert [report["name"] for report in data] == ["option", "outcome"]


def test_env_settings_apply_when_flags_absent(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("VESSEL_BENCH_ITERATIONS", "2")
    monkeypatch.setenv("VESSEL_BENCH_WARMUP", "0")

    assert main(["outcome", "--json"]) == 0
    (report,) = json.loads(capsys.readouterr().out)
    assert report["iterations"] == 2


def test_unknown_module_exits_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["nope", "--iterations", "1"]) == 2
    assert capsys.readouterr().out == ""


def test_invalid_setting_exits_2(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--iterations", "0"]) == 2
    assert capsys.readouterr().out == ""


def _failing_module(exc: Exception) -> BenchModule[None]:
    def fn(profiler: Profiler, parameter: None) -> None:
        raise exc

    return BenchModule(functions={"broken": fn})


@pytest.mark.parametrize(
    "exc", [BenchmarkError("misused profiler"), ValueError("bad parameter")]
)
def test_failing_benchmark_exits_1(
    exc: Exception,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
    caplog: pytest.LogCaptureFixture,
) -> None:
    monkeypatch.setitem(BUILTIN_MODULES, "option", _failing_module(exc))

    assert main(["option", "--iterations", "1", "--warmup", "0"]) == 1
    assert capsys.readouterr().out == ""
    assert str(exc) in caplog.text
