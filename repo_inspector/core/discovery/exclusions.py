# repo_inspector/core/discovery/exclusions.py
"""
Static exclusion and configuration-name tables.

The tables are loaded once into frozensets and shared by reference between
the walker and every concurrent classification task; nothing mutates them.
"""
from dataclasses import dataclass
from typing import FrozenSet, Iterable, Tuple

DEFAULT_EXCLUDED_DIR_NAMES: Tuple[str, ...] = (
    ".git",
    "node_modules",
    "dist",
    "build",
    "out",
    ".next",
    ".vercel",
    ".turbo",
    "coverage",
    ".nyc_output",
    ".idea",
    ".vscode",
    "venv",
    ".venv",
    "pnpm-store",
    "temp",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".tox",
)

DEFAULT_EXCLUDED_FILE_NAMES: Tuple[str, ...] = (".DS_Store", "Thumbs.db")

CONFIG_BASENAMES: Tuple[str, ...] = (
    "package.json",
    "package-lock.json",
    "pnpm-lock.yaml",
    "yarn.lock",
    ".npmrc",
    ".nvmrc",
    ".editorconfig",
    ".gitattributes",
    ".gitignore",
    ".gitmodules",
    ".env",
    ".env.local",
    ".env.example",
    "tsconfig.json",
    "jsconfig.json",
    ".eslintrc",
    ".eslintrc.js",
    ".eslintrc.cjs",
    ".eslintrc.json",
    ".prettierrc",
    ".prettierrc.js",
    ".prettierrc.cjs",
    ".prettierrc.json",
    ".prettierignore",
    "prettier.config.js",
    "prettier.config.cjs",
    "jest.config.js",
    "jest.config.cjs",
    "vitest.config.ts",
    "vitest.config.js",
    "webpack.config.js",
    "rollup.config.js",
    "vite.config.ts",
    "vite.config.js",
    "Dockerfile",
    "docker-compose.yml",
    "docker-compose.yaml",
    "pyproject.toml",
    "setup.cfg",
    "tox.ini",
    "pytest.ini",
    ".pre-commit-config.yaml",
    ".flake8",
)

# directories whose content is ci/tooling configuration.
CONFIG_DIR_PREFIXES: Tuple[str, ...] = (".github/", ".gitlab/", ".circleci/", ".husky/")


def _lowered(names: Iterable[str]) -> FrozenSet[str]:
    return frozenset(name.lower() for name in names)


@dataclass(frozen=True)
class ExclusionPolicy:
    # all members are lowercase; lookups lower-case their argument.
    excluded_dir_names: FrozenSet[str]
    excluded_file_names: FrozenSet[str]
    config_basenames: FrozenSet[str]
    config_dir_prefixes: Tuple[str, ...]

    @classmethod
    def from_tables(
        cls,
        dir_names: Iterable[str] = DEFAULT_EXCLUDED_DIR_NAMES,
        file_names: Iterable[str] = DEFAULT_EXCLUDED_FILE_NAMES,
        config_basenames: Iterable[str] = CONFIG_BASENAMES,
        config_dir_prefixes: Iterable[str] = CONFIG_DIR_PREFIXES,
    ) -> "ExclusionPolicy":
        return cls(
            excluded_dir_names=_lowered(dir_names),
            excluded_file_names=_lowered(file_names),
            config_basenames=_lowered(config_basenames),
            config_dir_prefixes=tuple(p.lower() for p in config_dir_prefixes),
        )

    def with_extra_names(self, dir_names: Iterable[str] = (), file_names: Iterable[str] = ()) -> "ExclusionPolicy":
        """Returns a new policy extended with user-configured names; self is left untouched."""
        return ExclusionPolicy(
            excluded_dir_names=self.excluded_dir_names | _lowered(dir_names),
            excluded_file_names=self.excluded_file_names | _lowered(file_names),
            config_basenames=self.config_basenames,
            config_dir_prefixes=self.config_dir_prefixes,
        )

    def is_excluded_dir(self, name: str) -> bool:
        return name.lower() in self.excluded_dir_names

    def is_excluded_file(self, name: str) -> bool:
        return name.lower() in self.excluded_file_names

    def is_known_config_by_basename(self, basename_lower: str) -> bool:
        return basename_lower in self.config_basenames

    def is_under_known_config_dir(self, rel_path_lower: str) -> bool:
        return any(rel_path_lower.startswith(prefix) for prefix in self.config_dir_prefixes)


DEFAULT_EXCLUSION_POLICY = ExclusionPolicy.from_tables()


def is_excluded_dir(name: str) -> bool:
    return DEFAULT_EXCLUSION_POLICY.is_excluded_dir(name)


def is_excluded_file(name: str) -> bool:
    return DEFAULT_EXCLUSION_POLICY.is_excluded_file(name)


def is_known_config_by_basename(basename_lower: str) -> bool:
    return DEFAULT_EXCLUSION_POLICY.is_known_config_by_basename(basename_lower)


def is_under_known_config_dir(rel_path_lower: str) -> bool:
    return DEFAULT_EXCLUSION_POLICY.is_under_known_config_dir(rel_path_lower)
