import importlib.util
from pathlib import Path

LAUNCHER_PATH = Path(__file__).resolve().parents[1] / 'run_dashboard.py'


def _load_launcher():
    spec = importlib.util.spec_from_file_location('run_dashboard_test', LAUNCHER_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_launcher_runs_home_page_with_extra_args(monkeypatch):
    module = _load_launcher()
    calls = []
    monkeypatch.setattr(module.subprocess, 'call', lambda args: calls.append(args) or 0)
    monkeypatch.setattr(module.sys, 'argv', ['run_dashboard.py', '--server.port', '8600'])

    assert module.main() == 0
    (args,) = calls
    assert args[1:4] == ['-m', 'streamlit', 'run']
    assert Path(args[4]) == module.HOME_PAGE
    assert module.HOME_PAGE.name == 'Home.py' and module.HOME_PAGE.exists()
    assert args[5:] == ['--server.port', '8600']
