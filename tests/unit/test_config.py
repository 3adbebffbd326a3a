from __future__ import annotations

from resource_library.app.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(SUPABASE_URL="https://project.supabase.co", SUPABASE_SERVICE_ROLE_KEY="key")

        assert settings.RESOURCES_SCHEMA == "portal"
        assert settings.LOG_LEVEL == "INFO"
        assert settings.FRONTEND_CORS_ORIGINS == ["http://localhost:3000"]

    def test_only_read_settings_are_declared(self) -> None:
        assert set(Settings.model_fields) == {
            "SUPABASE_URL",
            "SUPABASE_SERVICE_ROLE_KEY",
            "RESOURCES_SCHEMA",
            "LOG_LEVEL",
            "FRONTEND_CORS_ORIGINS",
        }
