"""
Kyuubi server configuration.

`KyuubiConf` owns the raw string settings of one configuration instance and
resolves typed reads through the declared entries below. Every entry is
registered in `KYUUBI_CONF_ENTRIES` when this module is imported.
"""

import threading
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from kyuubi import utils
from kyuubi.core.enums import AuthTypes, SaslQOP
from kyuubi.core.exceptions import PreconditionError
from kyuubi.logger import get_kyuubi_logger
from .core import ConfigBuilder, ConfigEntry, ConfigRegistry, MapConfigProvider, OptionalConfigEntry

KYUUBI_PREFIX = "kyuubi."
SPARK_PREFIX = "spark."


class KyuubiConf:
    """
    Thread-safe, string-keyed settings of one Kyuubi configuration instance.

    Values are layered: environment properties, then the defaults file, then
    explicit `set` calls; later writes win. Concurrent writes to the same key
    are last-write-wins.
    """

    def __init__(self, load_sys_default: bool = True, env: Optional[Mapping[str, str]] = None):
        self.logger = get_kyuubi_logger().bind(component="KyuubiConf")
        self._lock = threading.RLock()
        self._settings: Dict[str, str] = {}
        self._reader = MapConfigProvider(self._settings, self._lock)

        if load_sys_default:
            self.load_from_map(utils.get_system_properties(env), source="system")

    def load_from_map(self, props: Mapping[str, str], source: str = "map") -> "KyuubiConf":
        """Set every property whose key starts with `kyuubi.` or `spark.`."""
        loaded = 0
        for key, value in props.items():
            if key.startswith(KYUUBI_PREFIX) or key.startswith(SPARK_PREFIX):
                self.set(key, value)
                loaded += 1
        self.logger.debug("Properties loaded", source=source, count=loaded)
        return self

    def load_file_defaults(self, path: Optional[Union[str, Path]] = None) -> "KyuubiConf":
        """
        Load the defaults file, by default `kyuubi-defaults.conf` under
        `$KYUUBI_CONF_DIR` or `$KYUUBI_HOME/conf`.
        """
        config_file = Path(path) if path is not None else utils.get_default_properties_file()
        if config_file is None or not config_file.is_file():
            self.logger.debug("No properties file found", path=str(config_file))
            return self
        return self.load_from_map(utils.get_properties_from_file(config_file), source=str(config_file))

    def set(self, key: Union[str, ConfigEntry], value: Any) -> "KyuubiConf":
        """
        Set a raw string under `key`, or a typed value through an entry.

        Setting None through an optional entry removes the key.

        Raises:
            PreconditionError: If a raw key or value is None or not a string
        """
        if isinstance(key, ConfigEntry):
            raw = self._entry_to_raw(key, value)
            if raw is None:
                return self.unset(key)
            key = key.key
        else:
            raw = value

        self._check_raw(key, raw)
        with self._lock:
            self._settings[key] = raw
        return self

    def set_if_missing(self, entry: ConfigEntry, value: Any) -> "KyuubiConf":
        """
        Set `value` through `entry` only if its key is not set yet.

        None through an optional entry leaves the settings untouched.
        """
        raw = self._entry_to_raw(entry, value)
        if raw is None:
            return self
        self._check_raw(entry.key, raw)
        with self._lock:
            self._settings.setdefault(entry.key, raw)
        return self

    @staticmethod
    def _entry_to_raw(entry: ConfigEntry, value: Any) -> Optional[str]:
        # None only for an optional entry given None
        if isinstance(entry, OptionalConfigEntry):
            return entry.to_string(value)
        if value is None:
            raise PreconditionError("value", f"must not be None (key '{entry.key}')")
        return entry.converter(value)

    @staticmethod
    def _check_raw(key: Any, value: Any):
        if key is None:
            raise PreconditionError("key", "must not be None")
        if value is None:
            raise PreconditionError("value", f"must not be None (key '{key}')")
        if not isinstance(key, str) or not isinstance(value, str):
            raise PreconditionError("key" if not isinstance(key, str) else "value", "must be a string")

    def get(self, entry: ConfigEntry) -> Any:
        """
        Resolve the typed value of `entry`.

        Raises:
            ConfigParseError: If the raw value does not match the entry's type
            ConfigValidationError: If the value fails one of the entry's validators
        """
        return entry.read_from(self._reader)

    def get_option(self, key: str) -> Optional[str]:
        """Raw value of `key`, or None."""
        with self._lock:
            return self._settings.get(key)

    def unset(self, key: Union[str, ConfigEntry]) -> "KyuubiConf":
        """Remove a parameter from the configuration."""
        if isinstance(key, ConfigEntry):
            key = key.key
        with self._lock:
            self._settings.pop(key, None)
        return self

    def get_all(self) -> Dict[str, str]:
        """Snapshot of all parameters."""
        with self._lock:
            return dict(self._settings)

    def get_all_with_prefix(self, dropped: str, remainder: str) -> Dict[str, str]:
        """
        Retrieve parameters starting with `dropped.remainder`, with the
        `dropped.` part removed from the returned keys.
        """
        prefix = f"{dropped}.{remainder}"
        return {
            key[len(dropped) + 1:]: value
            for key, value in self.get_all().items()
            if key.startswith(prefix)
        }

    def clone(self) -> "KyuubiConf":
        """Copy this configuration; the copy owns its own settings."""
        cloned = KyuubiConf(load_sys_default=False)
        for key, value in self.get_all().items():
            cloned.set(key, value)
        return cloned

    def to_spark_prefixed_conf(self) -> Dict[str, str]:
        """
        Convert the settings to keys Spark can identify.

        - `spark.*` keys are kept as is
        - `hadoop.*` keys are prefixed with `spark.`, giving `spark.hadoop.*`
        - any other key is prefixed with `spark.`
        """
        converted = {}
        for key, value in self.get_all().items():
            if key.startswith(SPARK_PREFIX):
                converted[key] = value
            else:
                # hadoop.* lands under spark.hadoop.* this way
                converted[SPARK_PREFIX + key] = value
        return converted

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._settings

    def __len__(self) -> int:
        with self._lock:
            return len(self._settings)

    def __repr__(self):
        return f"KyuubiConf({len(self)} settings)"


KYUUBI_CONF_ENTRIES = ConfigRegistry("kyuubi")


def build_conf(key: str, registry: Optional[ConfigRegistry] = None) -> ConfigBuilder:
    """Start declaring the entry `kyuubi.<key>`, registered on creation."""
    registry = KYUUBI_CONF_ENTRIES if registry is None else registry
    return ConfigBuilder(KYUUBI_PREFIX + key).on_create(registry.register)


def _millis(**kwargs) -> int:
    return int(timedelta(**kwargs) // timedelta(milliseconds=1))


EMBEDDED_ZK_PORT = (build_conf("zookeeper.embedded.port")
                    .doc("The port of the embedded zookeeper server")
                    .version("1.0.0")
                    .int_conf()
                    .create_with_default(2181))

EMBEDDED_ZK_TEMP_DIR = (build_conf("zookeeper.embedded.directory")
                        .doc("The temporary directory for the embedded zookeeper server")
                        .version("1.0.0")
                        .string_conf()
                        .create_with_default("embedded_zookeeper"))

SERVER_PRINCIPAL = (build_conf("kinit.principal")
                    .doc("Name of the Kerberos principal.")
                    .version("1.0.0")
                    .string_conf()
                    .create_optional())

SERVER_KEYTAB = (build_conf("kinit.keytab")
                 .doc("Location of Kyuubi server's keytab.")
                 .version("1.0.0")
                 .string_conf()
                 .create_optional())

KINIT_INTERVAL = (build_conf("kinit.interval")
                  .doc("How often will Kyuubi server run `kinit -kt [keytab] [principal]` to renew the"
                       " local Kerberos credentials cache")
                  .version("1.0.0")
                  .time_conf()
                  .create_with_default_string("PT1H"))

KINIT_MAX_ATTEMPTS = (build_conf("kinit.max.attempts")
                      .doc("How many times will `kinit` process retry")
                      .version("1.0.0")
                      .int_conf()
                      .create_with_default(10))

OPERATION_IDLE_TIMEOUT = (build_conf("operation.idle.timeout")
                          .doc("Operation will be closed when it's not accessed for this duration of time")
                          .version("1.0.0")
                          .time_conf()
                          .create_with_default(_millis(hours=3)))

# Frontend Service Configuration

FRONTEND_BIND_HOST = (build_conf("frontend.bind.host")
                      .doc("Hostname or IP of the machine on which to run the frontend service.")
                      .version("1.0.0")
                      .string_conf()
                      .create_optional())

FRONTEND_BIND_PORT = (build_conf("frontend.bind.port")
                      .doc("Port of the machine on which to run the frontend service.")
                      .version("1.0.0")
                      .int_conf()
                      .check_value(lambda p: p == 0 or 1024 < p < 65535, "Invalid Port number")
                      .create_with_default(10009))

FRONTEND_MIN_WORKER_THREADS = (build_conf("frontend.min.worker.threads")
                               .doc("Minimum number of threads in the of frontend worker thread pool for"
                                    " the frontend service")
                               .version("1.0.0")
                               .int_conf()
                               .create_with_default(9))

FRONTEND_MAX_WORKER_THREADS = (build_conf("frontend.max.worker.threads")
                               .doc("Maximum number of threads in the of frontend worker thread pool for"
                                    " the frontend service")
                               .version("1.0.0")
                               .int_conf()
                               .create_with_default(99))

FRONTEND_WORKER_KEEPALIVE_TIME = (build_conf("frontend.worker.keepalive.time")
                                  .doc("Keep-alive time (in milliseconds) for an idle worker thread")
                                  .version("1.0.0")
                                  .time_conf()
                                  .create_with_default(_millis(seconds=60)))

FRONTEND_MAX_MESSAGE_SIZE = (build_conf("frontend.max.message.size")
                             .doc("Maximum message size in bytes a Kyuubi server will accept.")
                             .version("1.0.0")
                             .int_conf()
                             .create_with_default(104857600))

FRONTEND_LOGIN_TIMEOUT = (build_conf("frontend.login.timeout")
                          .doc("Timeout for Thrift clients during login to the frontend service.")
                          .version("1.0.0")
                          .time_conf()
                          .create_with_default(_millis(seconds=20)))

FRONTEND_LOGIN_BACKOFF_SLOT_LENGTH = (build_conf("frontend.backoff.slot.length")
                                      .doc("Time to back off during login to the frontend service.")
                                      .version("1.0.0")
                                      .time_conf()
                                      .create_with_default(_millis(milliseconds=100)))

AUTHENTICATION_METHOD = (build_conf("authentication")
                         .doc("Client authentication types.<ul>"
                              " <li>NOSASL: raw transport.</li>"
                              " <li>NONE: no authentication check.</li>"
                              " <li>KERBEROS: Kerberos/GSSAPI authentication.</li>"
                              " <li>LDAP: Lightweight Directory Access Protocol authentication.</li></ul>")
                         .version("1.0.0")
                         .string_conf()
                         .transform(str.upper)
                         .check_values(str(t) for t in AuthTypes)
                         .create_with_default(str(AuthTypes.NONE)))

AUTHENTICATION_LDAP_URL = (build_conf("authentication.ldap.url")
                           .doc("SPACE character separated LDAP connection URL(s).")
                           .version("1.0.0")
                           .string_conf()
                           .create_optional())

AUTHENTICATION_LDAP_BASEDN = (build_conf("authentication.ldap.base.dn")
                              .doc("LDAP base DN.")
                              .version("1.0.0")
                              .string_conf()
                              .create_optional())

AUTHENTICATION_LDAP_DOMAIN = (build_conf("authentication.ldap.domain")
                              .doc("LDAP domain.")
                              .version("1.0.0")
                              .string_conf()
                              .create_optional())

DELEGATION_KEY_UPDATE_INTERVAL = (build_conf("delegation.key.update.interval")
                                  .doc("unused yet")
                                  .version("1.0.0")
                                  .time_conf()
                                  .create_with_default(_millis(days=1)))

DELEGATION_TOKEN_MAX_LIFETIME = (build_conf("delegation.token.max.lifetime")
                                 .doc("unused yet")
                                 .version("1.0.0")
                                 .time_conf()
                                 .create_with_default(_millis(days=7)))

DELEGATION_TOKEN_GC_INTERVAL = (build_conf("delegation.token.gc.interval")
                                .doc("unused yet")
                                .version("1.0.0")
                                .time_conf()
                                .create_with_default(_millis(hours=1)))

DELEGATION_TOKEN_RENEW_INTERVAL = (build_conf("delegation.token.renew.interval")
                                   .doc("unused yet")
                                   .version("1.0.0")
                                   .time_conf()
                                   .create_with_default(_millis(days=7)))

SASL_QOP = (build_conf("authentication.sasl.qop")
            .doc("Sasl QOP enable higher levels of protection for Kyuubi communication with clients.<ul>"
                 " <li>auth - authentication only (default)</li>"
                 " <li>auth-int - authentication plus integrity protection</li>"
                 " <li>auth-conf - authentication plus integrity and confidentiality protection. This is"
                 " applicable only if Kyuubi is configured to use Kerberos authentication.</li> </ul>")
            .version("1.0.0")
            .string_conf()
            .check_values(str(q) for q in SaslQOP)
            .transform(str.lower)
            .create_with_default(str(SaslQOP.AUTH)))

# SQL Engine Configuration

ENGINE_SPARK_MAIN_RESOURCE = (build_conf("session.engine.spark.main.resource")
                              .doc("The package used to create Spark SQL engine remote application. If it"
                                   " is undefined, Kyuubi will use the default")
                              .version("1.0.0")
                              .string_conf()
                              .create_optional())

ENGINE_LOGIN_TIMEOUT = (build_conf("session.engine.login.timeout")
                        .doc("The timeout(ms) of creating the connection to remote sql query engine")
                        .version("1.0.0")
                        .time_conf()
                        .create_with_default(_millis(seconds=15)))

ENGINE_INIT_TIMEOUT = (build_conf("session.engine.initialize.timeout")
                       .doc("Timeout for starting the background engine, e.g. SparkSQLEngine.")
                       .version("1.0.0")
                       .time_conf()
                       .create_with_default(_millis(seconds=60)))

SESSION_CHECK_INTERVAL = (build_conf("session.check.interval")
                          .doc("The check interval for session timeout.")
                          .version("1.0.0")
                          .time_conf()
                          .check_value(lambda v: v > _millis(seconds=3), "Minimum 3 seconds")
                          .create_with_default(_millis(minutes=5)))

SESSION_TIMEOUT = (build_conf("session.timeout")
                   .doc("session timeout, it will be closed when it's not accessed for this duration")
                   .version("1.0.0")
                   .time_conf()
                   .check_value(lambda v: v > _millis(seconds=3), "Minimum 3 seconds")
                   .create_with_default(_millis(hours=6)))

ENGINE_CHECK_INTERVAL = (build_conf("engine.check.interval")
                         .doc("The check interval for engine timeout")
                         .version("1.0.0")
                         .time_conf()
                         .check_value(lambda v: v > _millis(seconds=3), "Minimum 3 seconds")
                         .create_with_default(_millis(minutes=10)))

ENGINE_IDLE_TIMEOUT = (build_conf("engine.idle.timeout")
                       .doc("engine timeout, it will be closed when it's not accessed for this duration")
                       .version("1.0.0")
                       .time_conf()
                       .create_with_default(_millis(minutes=30)))
