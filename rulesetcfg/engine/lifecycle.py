from __future__ import annotations

import copy
import logging
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional, Tuple

from configs.migrate import migrate_config, migration_path
from configs.validate import default_config, validate_config, validate_config_verbose

from ..errors import format_error
from ..io.log import LIFECYCLE_LOG, append_jsonl
from ..store import DualTierStore
from .gate import CoalescingGate

logger = logging.getLogger(__name__)

DEFAULT_KEY = "rulesetConfig"


@dataclass
class ProcessFlags:
    """Transient per-process flags; written only by ConfigLifecycle.load()."""

    first_run: bool = True
    wakeup_run: bool = True
    developer_mode: bool = False

    def to_dict(self) -> Dict[str, bool]:
        return asdict(self)


class ConfigLifecycle:
    """
    Owner of the single authoritative ruleset configuration.

    `config` is created once and never rebound: load() and save() replace its
    contents in place, so anyone holding the dict sees every update. Other
    code may read it at any time but should route changes through save().
    Both tiers are only ever written through one CoalescingGate, so load
    write-backs and saves never interleave.
    """

    def __init__(
        self,
        store: DualTierStore,
        *,
        flavor: Optional[str] = None,
        key: str = DEFAULT_KEY,
        event_log: bool = False,
    ):
        self.store = store
        self.flavor = flavor
        self.key = key
        self.event_log = event_log
        self._template = default_config(flavor)
        self.config: Dict[str, Any] = self.defaults()
        self.flags = ProcessFlags()
        self._gate = CoalescingGate(self._persist, name="persist")

    def defaults(self) -> Dict[str, Any]:
        return copy.deepcopy(self._template)

    # -------------------------
    # internals
    # -------------------------

    def _replace(self, new: Dict[str, Any]) -> None:
        self.config.clear()
        self.config.update(new)

    def _event(self, kind: str, **fields: Any) -> None:
        try:
            append_jsonl(LIFECYCLE_LOG, {"event": kind, **fields}, feature_guard=self.event_log)
        except OSError as e:
            logger.warning("could not append %s event: %s", kind, format_error(e))

    async def _read_source(self) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
        session = await self.store.read_session(self.key)
        if session is not None:
            ok, errs = validate_config_verbose(session)
            if ok:
                return session, "session"
            logger.info("ignoring session copy: %s", errs[0])

        local = await self.store.read_local(self.key)
        if local is not None:
            ok, errs = validate_config_verbose(local)
            if ok:
                return local, "local"
            logger.info("ignoring local copy: %s", errs[0])
        return None, None

    async def _persist(self) -> None:
        # Snapshot at run time so session and local receive the same object.
        snapshot = copy.deepcopy(self.config)
        if not validate_config(snapshot):
            logger.warning("in-memory config invalid at write time; persisting defaults")
            self._replace(self.defaults())
            snapshot = self.defaults()
        await self.store.write_both(self.key, snapshot)

    # -------------------------
    # Public API
    # -------------------------

    async def load(self) -> None:
        """
        Re-derive the authoritative config from storage.

        Session copy first, then local; the first valid one is migrated,
        installed and written back to both tiers. With neither present the
        defaults are installed and written. A storage failure while reading
        keeps the current contents, sets every process flag and skips
        persistence. Never raises.
        """
        try:
            source, tier = await self._read_source()

            if source is None:
                self._replace(self.defaults())
                self.flags.first_run = True
                self.flags.wakeup_run = False
                outcome = await self._gate.run()
                self._event("load", source=None, persisted=outcome.ok)
                return

            path = migration_path(source)
            migrated = migrate_config(source, self._template)
            self._replace(migrated)
            self.flags.first_run = False
            self.flags.wakeup_run = True
            logger.debug("loaded config from %s tier via %s migration", tier, path)

            outcome = await self._gate.run()
            if not outcome.ok:
                logger.warning("loaded config not persisted: %s", outcome.error)
            self._event("load", source=tier, migration=path, persisted=outcome.ok)
        except Exception as e:  # noqa: BLE001
            logger.exception("failed to load ruleset config; running on in-memory copy")
            self.flags.first_run = True
            self.flags.wakeup_run = True
            self.flags.developer_mode = True
            self._event("load", source=None, error=format_error(e))

    async def save(self) -> bool:
        """
        Persist the in-memory config to both tiers.

        An invalid config is reset to defaults first. Concurrent callers are
        serialized and coalesced; returns the outcome of the write this call
        ended up sharing. Failures are logged, never raised.
        """
        ok, errs = validate_config_verbose(self.config)
        if not ok:
            logger.warning("refusing to save invalid config (%s); resetting to defaults", errs[0])
            self._replace(self.defaults())

        outcome = await self._gate.run()
        self._event("save", ok=outcome.ok, seq=outcome.seq, error=outcome.error)
        return outcome.ok
