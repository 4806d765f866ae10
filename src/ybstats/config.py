"""Runtime configuration.

Settings are resolved once at startup, in this order of precedence:

1. command line options
2. process environment (``YBSTATS_*``)
3. the ``.env`` file
4. built-in defaults

Hosts, ports and parallelism given on the command line are written back to
the ``.env`` file so the next run reuses them.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values, set_key

from ybstats.core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_HOSTS = "192.168.66.80,192.168.66.81,192.168.66.82"
DEFAULT_PORTS = "7000,9000,12000,13000,9300"
DEFAULT_PARALLEL = "1"
DEFAULT_SNAPSHOT_DIR = "yb_stats.snapshots"
DEFAULT_STORE = "sqlite"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_ENV_FILE = ".env"

STORE_KINDS = ("sqlite", "ndjson")

ENV_HOSTS = "YBSTATS_HOSTS"
ENV_PORTS = "YBSTATS_PORTS"
ENV_PARALLEL = "YBSTATS_PARALLEL"
ENV_SNAPSHOT_DIR = "YBSTATS_SNAPSHOT_DIR"
ENV_STORE = "YBSTATS_STORE"
ENV_LOG_LEVEL = "YBSTATS_LOG_LEVEL"

# Options persisted to the .env file when given explicitly.
_PERSISTED = {"hosts": ENV_HOSTS, "ports": ENV_PORTS, "parallel": ENV_PARALLEL}


def _split(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


def parse_hosts(raw: str) -> tuple[str, ...]:
    """Parse a comma separated host list."""
    hosts = tuple(_split(raw))
    if not hosts:
        raise ConfigError("host list is empty")
    return hosts


def parse_ports(raw: str) -> tuple[int, ...]:
    """Parse a comma separated port list."""
    ports = []
    for item in _split(raw):
        try:
            port = int(item)
        except ValueError:
            raise ConfigError(f"port is not a number: {item!r}") from None
        if not 0 < port < 65536:
            raise ConfigError(f"port out of range: {port}")
        ports.append(port)
    if not ports:
        raise ConfigError("port list is empty")
    return tuple(ports)


def parse_parallel(raw: str) -> int:
    """Parse the number of nodes fetched at the same time."""
    try:
        parallel = int(raw)
    except ValueError:
        raise ConfigError(f"parallel is not a number: {raw!r}") from None
    if parallel < 1:
        raise ConfigError(f"parallel must be at least 1, got {parallel}")
    return parallel


@dataclass(frozen=True)
class Settings:
    """Resolved configuration of one run.

    Attributes:
        hosts: Cluster hosts.
        ports: Ports visited on every host.
        parallel: Maximum number of (host, port) pairs fetched at once.
        snapshot_dir: Directory holding stored snapshots.
        store: Snapshot store backend, "sqlite" or "ndjson".
        log_level: Level name for the ybstats logger.
        keep_zero_values: Keep value statistics that are zero.
    """

    hosts: tuple[str, ...] = parse_hosts(DEFAULT_HOSTS)
    ports: tuple[int, ...] = parse_ports(DEFAULT_PORTS)
    parallel: int = 1
    snapshot_dir: Path = Path(DEFAULT_SNAPSHOT_DIR)
    store: str = DEFAULT_STORE
    log_level: str = DEFAULT_LOG_LEVEL
    keep_zero_values: bool = False

    @classmethod
    def load(
        cls,
        *,
        hosts: str | None = None,
        ports: str | None = None,
        parallel: str | int | None = None,
        snapshot_dir: str | Path | None = None,
        store: str | None = None,
        log_level: str | None = None,
        keep_zero_values: bool = False,
        env_file: str | Path = DEFAULT_ENV_FILE,
        environ: Mapping[str, str] | None = None,
        write_back: bool = True,
    ) -> "Settings":
        """Resolve settings from options, environment, ``.env`` and defaults.

        Args:
            hosts: Comma separated hosts from the command line.
            ports: Comma separated ports from the command line.
            parallel: Parallelism from the command line.
            snapshot_dir: Snapshot directory from the command line.
            store: Snapshot store backend from the command line.
            log_level: Log level from the command line.
            keep_zero_values: Keep zero value statistics.
            env_file: Path of the ``.env`` file.
            environ: Environment to read; defaults to ``os.environ``.
            write_back: Persist explicitly given hosts, ports and parallel.

        Raises:
            ConfigError: If a value cannot be parsed.
        """
        env_path = Path(env_file)
        file_values = dotenv_values(env_path) if env_path.is_file() else {}
        environ = os.environ if environ is None else environ

        def resolve(given: object, env_name: str, default: str) -> str:
            if given is not None:
                return str(given)
            if env_name in environ:
                return environ[env_name]
            value = file_values.get(env_name)
            return default if value is None else value

        store_value = resolve(store, ENV_STORE, DEFAULT_STORE)
        if store_value not in STORE_KINDS:
            raise ConfigError(f"unknown snapshot store: {store_value!r}")

        settings = cls(
            hosts=parse_hosts(resolve(hosts, ENV_HOSTS, DEFAULT_HOSTS)),
            ports=parse_ports(resolve(ports, ENV_PORTS, DEFAULT_PORTS)),
            parallel=parse_parallel(resolve(parallel, ENV_PARALLEL, DEFAULT_PARALLEL)),
            snapshot_dir=Path(resolve(snapshot_dir, ENV_SNAPSHOT_DIR, DEFAULT_SNAPSHOT_DIR)),
            store=store_value,
            log_level=resolve(log_level, ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
            keep_zero_values=keep_zero_values,
        )
        if write_back:
            given = {"hosts": hosts, "ports": ports, "parallel": parallel}
            settings.save(env_path, [name for name, value in given.items() if value is not None])
        return settings

    def save(self, env_file: str | Path, names: list[str]) -> None:
        """Write the named settings to ``env_file``."""
        if not names:
            return
        env_path = Path(env_file)
        env_path.touch(exist_ok=True)
        for name in names:
            value = getattr(self, name)
            if isinstance(value, tuple):
                value = ",".join(str(item) for item in value)
            set_key(env_path, _PERSISTED[name], str(value), quote_mode="never")
            logger.debug("saved %s=%s to %s", _PERSISTED[name], value, env_path)
