"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "openshift-client"
APP_AUTHOR = "openshift"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME, APP_AUTHOR)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_SERVER_URL = "OPENSHIFT_SERVER_URL"
ENV_USERNAME = "OPENSHIFT_USERNAME"
ENV_PASSWORD = "OPENSHIFT_PASSWORD"
ENV_TOKEN = "OPENSHIFT_TOKEN"
ENV_PROFILE = "OPENSHIFT_PROFILE"

# Broker defaults
DEFAULT_SERVER_URL = "https://openshift.redhat.com"
SERVICE_PATH = "/broker/rest/"
DEFAULT_TIMEOUT = 60.0
DEFAULT_CLIENT_ID = "openshift-client"
