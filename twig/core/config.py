"""Settings files and commit identity."""

import configparser
import io
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import MissingIdentityError
from .objects import Signature, now
from twig.utils.fs import atomic_write_text


@dataclass(frozen=True)
class Identity:
    """Name and email of whoever authors or commits."""
    name: str
    email: str

    def signature(self, timestamp: Optional[int] = None, timezone: str = '+0000') -> Signature:
        """Stamp this identity with a time."""
        return Signature(self.name, self.email, now() if timestamp is None else timestamp, timezone)

    @classmethod
    def parse(cls, value: str) -> 'Identity':
        """
        Parse ``Name <email>``.

        Raises:
            ValueError: If value is not in that form
        """
        name, sep, rest = value.partition('<')
        email = rest.rstrip().rstrip('>')
        if not sep or not name.strip() or not email or not rest.rstrip().endswith('>'):
            raise ValueError(f"Expected 'Name <email>', got {value!r}")
        return cls(name.strip(), email.strip())

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"


def require_identity(identity: Optional[Identity]) -> Identity:
    """
    Raises:
        MissingIdentityError: If identity is absent or incomplete
    """
    if identity is None or not identity.name or not identity.email:
        raise MissingIdentityError()
    return identity


def _load(path: Path) -> configparser.ConfigParser:
    parser = configparser.ConfigParser()
    if path.exists():
        parser.read(path)
    return parser


class Config:
    """
    Layered INI settings.

    Lookups consult, in order: ``TWIG_<SECTION>_<KEY>`` environment
    variables, the repository file ``.twig/config``, then the user file
    ``~/.twigconfig`` (relocatable through ``TWIG_GLOBAL_CONFIG``).
    Writes go to exactly one of the two files.
    """

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Args:
            repo_config_path: The repository's config file; None outside a repository
        """
        self.repo_config_path = repo_config_path
        self._global_config: Optional[configparser.ConfigParser] = None
        self._repo_config: Optional[configparser.ConfigParser] = None

    @staticmethod
    def global_config_path() -> Path:
        override = os.environ.get('TWIG_GLOBAL_CONFIG')
        if override:
            return Path(override)
        return Path.home() / '.twigconfig'

    @property
    def global_config(self) -> configparser.ConfigParser:
        if self._global_config is None:
            self._global_config = _load(self.global_config_path())
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = _load(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """Look key up in the environment, then the repository file, then the user file."""
        env_value = os.environ.get(f"TWIG_{section.upper()}_{key.upper()}")
        if env_value is not None:
            return env_value

        for parser in (self.repo_config, self.global_config):
            if parser is not None and parser.has_option(section, key):
                return parser.get(section, key)
        return fallback

    def _target(self, global_config: bool) -> Tuple[configparser.ConfigParser, Path]:
        if global_config:
            return self.global_config, self.global_config_path()
        if self.repo_config is None or self.repo_config_path is None:
            raise ValueError("Not inside a repository; only the global config can be written")
        return self.repo_config, self.repo_config_path

    @staticmethod
    def _save(parser: configparser.ConfigParser, path: Path) -> None:
        buffer = io.StringIO()
        parser.write(buffer)
        atomic_write_text(path, buffer.getvalue())

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """Store section.key = value in the repository file (or the user file)."""
        parser, path = self._target(global_config)
        if not parser.has_section(section):
            parser.add_section(section)
        parser.set(section, key, value)
        self._save(parser, path)

    def unset(self, section: str, key: str, global_config: bool = False) -> bool:
        """
        Drop section.key, and the section once it is empty.

        Returns:
            False when the key was not set in the chosen file
        """
        parser, path = self._target(global_config)
        if not parser.has_option(section, key):
            return False
        parser.remove_option(section, key)
        if not parser.options(section):
            parser.remove_section(section)
        self._save(parser, path)
        return True

    def list_all(self) -> Dict[str, Dict[str, str]]:
        """All values, repository config overriding global config."""
        result: Dict[str, Dict[str, str]] = {}
        sources = [self.global_config]
        if self.repo_config is not None:
            sources.append(self.repo_config)
        for config in sources:
            for section in config.sections():
                result.setdefault(section, {}).update(config.items(section))
        return result

    def get_user_identity(self) -> Optional[Identity]:
        """
        Identity for new commits.

        TWIG_AUTHOR_NAME / TWIG_AUTHOR_EMAIL win over [user] name / email.

        Returns:
            Identity, or None when name or email is not configured
        """
        name = os.environ.get('TWIG_AUTHOR_NAME') or self.get('user', 'name')
        email = os.environ.get('TWIG_AUTHOR_EMAIL') or self.get('user', 'email')
        if not name or not email:
            return None
        return Identity(name, email)


def get_config(repo=None) -> Config:
    """Settings for repo, or user-level settings only when repo is None."""
    if repo:
        return Config(repo.config_file)
    return Config()
