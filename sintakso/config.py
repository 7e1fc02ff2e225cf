"""
Runtime settings.

Defaults can be overridden with SINTAKSO_* environment variables, and the
CLI overrides both with its arguments:

    SINTAKSO_LANGUAGE           en | es | ca
    SINTAKSO_TAG_MODE           rule_based | hmm | neural | ensemble
    SINTAKSO_HMM_MODEL          path to a saved HMM (.npz)
    SINTAKSO_NEURAL_MODEL       path to a saved BiLSTM checkpoint
    SINTAKSO_WORKERS            threads for sentence-level parsing
    SINTAKSO_LOG_FILE           log file path (empty string: console only)
    SINTAKSO_LOG_LEVEL          DEBUG | INFO | WARNING | ERROR
"""
import logging
import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .errors import SintaksoError, TagError
from .languages import DEFAULT_LANGUAGE, LANGUAGES
from .tagger import TagMode, resolve_mode

logger = logging.getLogger(__name__)

ENV_PREFIX = "SINTAKSO_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Settings:
    language: str = DEFAULT_LANGUAGE
    tag_mode: str = TagMode.RULE_BASED.value
    hmm_model_path: Optional[str] = None
    neural_model_path: Optional[str] = None
    workers: int = 1
    log_file: Optional[str] = "sintakso.log"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from SINTAKSO_* variables (default: os.environ)."""
        environ = os.environ if environ is None else environ
        settings = cls()
        values = {}

        def read(name):
            return environ.get(ENV_PREFIX + name)

        if read("LANGUAGE"):
            values["language"] = read("LANGUAGE").lower()
        if read("TAG_MODE"):
            values["tag_mode"] = read("TAG_MODE").lower()
        if read("HMM_MODEL"):
            values["hmm_model_path"] = read("HMM_MODEL")
        if read("NEURAL_MODEL"):
            values["neural_model_path"] = read("NEURAL_MODEL")
        if read("WORKERS"):
            try:
                values["workers"] = int(read("WORKERS"))
            except ValueError:
                raise SintaksoError(f"{ENV_PREFIX}WORKERS must be an integer, got '{read('WORKERS')}'") from None
        if read("LOG_FILE") is not None:
            values["log_file"] = read("LOG_FILE") or None
        if read("LOG_LEVEL"):
            values["log_level"] = read("LOG_LEVEL").upper()

        if values:
            logger.debug(f"Settings from environment: {sorted(values)}")
        return replace(settings, **values)

    def override(self, **values) -> "Settings":
        """Copy with every non-None value replaced."""
        return replace(self, **{key: value for key, value in values.items() if value is not None})

    def validate(self) -> "Settings":
        """
        Check the settings for consistency.

        Raises:
            SintaksoError: A value is out of range or a required model path
                is missing.
        """
        if self.language not in LANGUAGES:
            raise SintaksoError(
                f"Unsupported language '{self.language}'. Available: {', '.join(sorted(LANGUAGES))}"
            )
        try:
            mode = resolve_mode(self.tag_mode)
        except TagError as e:
            raise SintaksoError(str(e)) from e
        if mode is TagMode.HMM and not self.hmm_model_path:
            raise SintaksoError("Tag mode 'hmm' needs an HMM model path")
        if mode is TagMode.NEURAL and not self.neural_model_path:
            raise SintaksoError("Tag mode 'neural' needs a neural model path")
        if mode is TagMode.ENSEMBLE and not (self.hmm_model_path or self.neural_model_path):
            raise SintaksoError("Tag mode 'ensemble' needs at least one model path")
        if not isinstance(self.workers, int) or self.workers < 1:
            raise SintaksoError(f"workers must be a positive integer, got {self.workers!r}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise SintaksoError(f"Unknown log level '{self.log_level}'. Choose one of: {', '.join(LOG_LEVELS)}")
        return self

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())
