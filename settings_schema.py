from pydantic import BaseModel, Field, ValidationError

class SettingsSchema(BaseModel):
    db_file: str = "data.sqlite"
    port: int = Field(default=8080, ge=1, le=65535)
    jwt_secret: str = Field(default="change-me", min_length=1)
    token_expire_days: int = Field(default=7, ge=1)
    admin_email: str = "admin@local"
    admin_name: str = "Admin"
    admin_password: str = Field(default="admin123", min_length=6)
    log_level: str = "INFO"
    log_file: str | None = None

def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
