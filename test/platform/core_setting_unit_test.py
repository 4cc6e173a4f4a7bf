from pathlib import Path

import pytest

from src.platform.config.core_setting import Settings


PROJECT_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(autouse=True)
def _no_cors_env(monkeypatch) -> None:
    monkeypatch.delenv('BACKEND_CORS_ORIGINS', raising=False)


class TestSettingsLoading:
    @pytest.mark.unit
    def test_shipped_env_example_loads(self) -> None:
        """
        Given: a fresh checkout with only .env.example
        When: Settings is built from it
        Then: the comma separated CORS origin is parsed into a list
        """
        loaded = Settings(_env_file=str(PROJECT_ROOT / '.env.example'))  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == ['http://localhost:3000']

    @pytest.mark.unit
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('http://a.test, http://b.test', ['http://a.test', 'http://b.test']),
            ('["http://a.test", "http://b.test"]', ['http://a.test', 'http://b.test']),
            ('http://a.test,', ['http://a.test']),
        ],
    )
    def test_cors_origins_formats(self, tmp_path, raw: str, expected: list[str]) -> None:
        env_file = tmp_path / '.env'
        env_file.write_text(f"BACKEND_CORS_ORIGINS='{raw}'\n")

        loaded = Settings(_env_file=str(env_file))  # type: ignore[call-arg]

        assert loaded.BACKEND_CORS_ORIGINS == expected

    @pytest.mark.unit
    def test_cors_origins_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv('BACKEND_CORS_ORIGINS', 'http://x.test,http://y.test')

        assert Settings().BACKEND_CORS_ORIGINS == ['http://x.test', 'http://y.test']
