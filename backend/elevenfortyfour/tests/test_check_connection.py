from unittest.mock import AsyncMock, patch

from elevenfortyfour.core.models.waitlist import ConnectionReport
from elevenfortyfour.scripts import check_connection


def test_describe_key():
    assert "publishable" in check_connection.describe_key("sb_publishable_abc")
    assert "Legacy" in check_connection.describe_key("eyJhbGciOiJIUzI1NiJ9")


def test_diagnose_reports():
    assert "Successfully connected" in check_connection.diagnose(ConnectionReport(ok=True))
    assert "doesn't exist" in check_connection.diagnose(ConnectionReport(ok=False, code="42P01"))
    assert "authentication" in check_connection.diagnose(ConnectionReport(ok=False, code="PGRST301"))
    assert "authentication" in check_connection.diagnose(ConnectionReport(ok=False, message="JWT expired"))
    assert "Check that" in check_connection.diagnose(ConnectionReport(ok=False, code="500"))


def test_main_without_credentials(monkeypatch, capsys):
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "SUPABASE_ANON_KEY"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(check_connection, "load_dotenv", lambda: None)

    assert check_connection.main() == 1
    assert "must be set" in capsys.readouterr().out


def test_main_reports_failure(monkeypatch, capsys):
    monkeypatch.setattr(check_connection, "load_dotenv", lambda: None)
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "sb_publishable_123")
    report = ConnectionReport(ok=False, code="42P01", message='relation "waitlist" does not exist')

    with patch.object(check_connection, "run_check", new=AsyncMock(return_value=report)):
        assert check_connection.main() == 1

    out = capsys.readouterr().out
    assert "Code: 42P01" in out
    assert "doesn't exist" in out


def test_main_success(monkeypatch):
    monkeypatch.setattr(check_connection, "load_dotenv", lambda: None)
    monkeypatch.setenv("SUPABASE_URL", "https://abc.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "sb_publishable_123")

    with patch.object(check_connection, "run_check", new=AsyncMock(return_value=ConnectionReport(ok=True))):
        assert check_connection.main() == 0
