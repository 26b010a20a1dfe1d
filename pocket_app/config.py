import configparser
from typing import Annotated, Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pocket_app.errors import StartupConfigError

DEFAULT_CONFIG_PATH = "config.ini"

# Empty values count as missing, same as an absent key
RequiredStr = Annotated[str, Field(min_length=1)]
Port = Annotated[int, Field(ge=1, le=65535)]


def _parse_port(value: str, key: str) -> int:
    try:
        port = int(value)
    except ValueError:
        port = 0
    if not 1 <= port <= 65535:
        raise ValueError(f"Invalid value for '{key}' under section: general: {value!r} is not a port number")
    return port


class GeneralSettings(BaseModel):
    """The ``[general]`` section: storage, auth and listener settings"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    database: RequiredStr
    secret: RequiredStr
    authheader: RequiredStr
    sslport: RequiredStr
    httpport: RequiredStr
    sslcert: RequiredStr
    sslkey: RequiredStr
    httpenabled: RequiredStr
    sslenabled: RequiredStr

    host: str = "0.0.0.0"
    loglevel: Literal["critical", "error", "warning", "info", "debug"] = "info"

    @field_validator("loglevel", mode="before")
    @classmethod
    def _lower_loglevel(cls, value):
        return value.lower() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _check_enabled_ports(self):
        # A disabled listener's port only has to be present
        if self.http_enabled:
            _parse_port(self.httpport, "httpport")
        if self.ssl_enabled:
            _parse_port(self.sslport, "sslport")
        return self

    @property
    def http_enabled(self) -> bool:
        return self.httpenabled == "true"

    @property
    def ssl_enabled(self) -> bool:
        return self.sslenabled == "true"

    @property
    def http_port(self) -> int:
        return _parse_port(self.httpport, "httpport")

    @property
    def ssl_port(self) -> int:
        return _parse_port(self.sslport, "sslport")


class SMTPSettings(BaseModel):
    """The ``[smtp]`` section: outbound mail relay used by /notify"""

    model_config = ConfigDict(frozen=True, extra="ignore")

    server: RequiredStr
    port: Port
    username: RequiredStr
    password: RequiredStr
    sendto: RequiredStr

    sender: Optional[str] = None
    timeout: float = 30.0

    @property
    def recipients(self) -> List[str]:
        """Comma-separated ``sendto`` split into trimmed addresses"""
        return [value.strip() for value in self.sendto.split(",") if value.strip()]

    @property
    def envelope_sender(self) -> str:
        return self.sender or self.username


class Settings(BaseSettings):
    """
    Application settings, loaded once at startup and never mutated.

    Loading priority (highest to lowest):
    1. Environment variables (POCKET_GENERAL__SECRET, POCKET_SMTP__PORT, ...)
    2. The INI config file
    3. Default values below
    """

    general: GeneralSettings
    smtp: SMTPSettings

    model_config = SettingsConfigDict(
        env_prefix="POCKET_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # File values arrive as init kwargs; the environment overrides them
        return (env_settings, init_settings)


def read_ini(path: str) -> Dict[str, Dict[str, str]]:
    """Read an INI file into ``{section: {key: value}}``"""
    parser = configparser.ConfigParser(interpolation=None)
    try:
        loaded = parser.read(path, encoding="utf-8")
    except configparser.Error as e:
        raise StartupConfigError(f"Failed to load config file: {e}") from e

    if not loaded:
        raise StartupConfigError(f"Failed to load config file: {path}")

    return {section: dict(parser.items(section)) for section in parser.sections()}


def _describe(error: Dict[str, Any]) -> str:
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])

    loc = [str(part) for part in error["loc"]]
    if len(loc) == 1:
        if error["type"] == "missing":
            return f"Missing config section: {loc[0]}"
        return f"Invalid config section: {loc[0]}: {error['msg']}"

    section, key = loc[0], ".".join(loc[1:])
    if error["type"] in ("missing", "string_too_short"):
        return f"Missing key: '{key}' under section: {section}"
    return f"Invalid value for '{key}' under section: {section}: {error['msg']}"


def load_settings(path: str = DEFAULT_CONFIG_PATH) -> Settings:
    """
    Load and validate settings from ``path``.

    Raises:
        StartupConfigError: if the file can't be read or any required
            key is missing, empty or invalid
    """
    values = read_ini(path)
    try:
        return Settings(**values)
    except ValidationError as e:
        problems = "; ".join(_describe(error) for error in e.errors())
        raise StartupConfigError(problems) from e
