from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Document store (filesystem vault)
    vault_root: str = "vault"
    goals_folder: str = "Goals"  # "" stores weekly notes at the vault root
    max_weekly_goals: int = 3  # UI range is 1–3; the service clamps anything else
    default_tz: str = "UTC"  # Decides which ISO week is "current"

    # Cache: "memory" (process-local dict) or "sql" (key/value table)
    cache_backend: str = "memory"
    cache_namespace: str = "WeeklyGoals"
    cache_database_url: str = "postgresql+asyncpg://localhost:5432/weeklygoals"

    # Inbox capture
    new_tasks_folder: str = "To-Dos"
    new_tasks_file_name: str = "Inbox.md"
    due_date_attribute: str = "due"
    use_dataview_syntax: bool = False  # [due:: x] instead of @due(x)

    goals_api_key: str | None = None
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
