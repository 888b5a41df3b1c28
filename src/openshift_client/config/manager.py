"""Configuration manager: read/write TOML config, resolve profiles."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import tomli_w

from openshift_client.client.errors import ConfigurationError
from openshift_client.config.constants import (
    CONFIG_FILE,
    DEFAULT_SERVER_URL,
    DEFAULT_TIMEOUT,
    ENV_PASSWORD,
    ENV_PROFILE,
    ENV_SERVER_URL,
    ENV_TOKEN,
    ENV_USERNAME,
)
from openshift_client.config.models import ClientConfig, ProxySettings, ServerProfile

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib


class ConfigManager:
    """Manages client configuration on disk and resolves server profiles."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: ClientConfig | None = None

    @property
    def config(self) -> ClientConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> ClientConfig:
        if not self.config_path.exists():
            return ClientConfig()
        raw = self.config_path.read_bytes()
        try:
            data = tomllib.loads(raw.decode())
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(
                f"Invalid configuration file {self.config_path}: {exc}"
            ) from exc
        profiles: dict[str, ServerProfile] = {}
        for name, prof_data in data.get("profiles", {}).items():
            profiles[name] = ServerProfile(name=name, **prof_data)
        return ClientConfig(
            default_profile=data.get("default_profile"),
            default_format=data.get("default_format", "table"),
            profiles=profiles,
        )

    def save(self) -> None:
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        os.chmod(self.config_path.parent, 0o700)
        data: dict[str, Any] = {}
        if self.config.default_profile:
            data["default_profile"] = self.config.default_profile
        if self.config.default_format != "table":
            data["default_format"] = self.config.default_format
        if self.config.profiles:
            data["profiles"] = {}
            for name, profile in self.config.profiles.items():
                prof_dict = profile.model_dump(exclude={"name"}, exclude_none=True)
                if prof_dict.get("verify_ssl") is True:
                    del prof_dict["verify_ssl"]
                if prof_dict.get("timeout") == DEFAULT_TIMEOUT:
                    del prof_dict["timeout"]
                if prof_dict.get("proxy") == {"enabled": False}:
                    del prof_dict["proxy"]
                data["profiles"][name] = prof_dict
        # Atomic write: write to temp file, then rename
        temp = self.config_path.with_suffix(".tmp")
        fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        try:
            os.write(fd, tomli_w.dumps(data).encode())
        finally:
            os.close(fd)
        temp.rename(self.config_path)

    def add_profile(self, profile: ServerProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        del self.config.profiles[name]
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> ServerProfile | None:
        if name:
            return self.config.profiles.get(name)
        default = self.config.default_profile
        if default:
            return self.config.profiles.get(default)
        return None

    def resolve_server(
        self,
        profile_name: str | None = None,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
    ) -> ServerProfile:
        """Resolve the broker connection.

        Precedence: CLI flags > env vars > config profile > default server.
        """
        env_profile = os.environ.get(ENV_PROFILE)
        requested = profile_name or env_profile
        profile = self.get_profile(requested)
        if requested and profile is None:
            raise ConfigurationError(f"Profile '{requested}' not found.")

        resolved_url = (
            url
            or os.environ.get(ENV_SERVER_URL)
            or (profile.url if profile else DEFAULT_SERVER_URL)
        )
        resolved_user = username or os.environ.get(ENV_USERNAME) or (
            profile.username if profile else None
        )
        resolved_password = password or os.environ.get(ENV_PASSWORD) or (
            profile.password if profile else None
        )
        resolved_token = os.environ.get(ENV_TOKEN) or (profile.token if profile else None)

        if not resolved_token and not (resolved_user and resolved_password):
            raise ConfigurationError(
                "No credentials configured. Use 'openshift-client config add' or set "
                f"{ENV_USERNAME}/{ENV_PASSWORD} or {ENV_TOKEN}."
            )

        return ServerProfile(
            name=profile.name if profile else "cli",
            url=resolved_url.rstrip("/"),
            username=resolved_user,
            password=resolved_password,
            token=resolved_token,
            verify_ssl=profile.verify_ssl if profile else True,
            timeout=profile.timeout if profile else DEFAULT_TIMEOUT,
            proxy=profile.proxy if profile else ProxySettings(),
        )
