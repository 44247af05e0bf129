"""Purgeable folder definitions for devpurge."""

import json
from hashlib import sha1

from devpurge.models import Category, EvidenceRule, RuleKind


def _files(*names: str) -> EvidenceRule:
    return EvidenceRule(kind=RuleKind.ANY_FILE, files=list(names))


def _extensions(*exts: str) -> EvidenceRule:
    return EvidenceRule(kind=RuleKind.ANY_EXTENSION, extensions=list(exts))


_DOTNET_PROJECT = _extensions("csproj", "fsproj", "sln")

# All purgeable folder names keyed by the exact directory name
CATEGORIES: dict[str, Category] = {
    "node_modules": Category(
        name="node_modules",
        ecosystem="JavaScript/TypeScript",
        description="Installed npm/yarn/pnpm packages",
        rule=_files("package.json"),
    ),
    "target": Category(
        name="target",
        ecosystem="Rust",
        description="Cargo build output",
        rule=_files("Cargo.toml"),
    ),
    "build": Category(
        name="build",
        ecosystem="Java/Gradle/C++",
        description="Compiled build output",
        rule=_files(
            "pom.xml",
            "build.gradle",
            "build.gradle.kts",
            "Makefile",
            "CMakeLists.txt",
            "angular.json",
        ),
    ),
    "dist": Category(
        name="dist",
        ecosystem="Web",
        description="Bundled distribution output",
        rule=_files(
            "package.json",
            "angular.json",
            "tsconfig.json",
            "vite.config.js",
            "vite.config.ts",
        ),
    ),
    ".gradle": Category(
        name=".gradle",
        ecosystem="Gradle",
        description="Per-project Gradle caches",
        rule=_files(
            "build.gradle",
            "build.gradle.kts",
            "settings.gradle",
            "settings.gradle.kts",
        ),
    ),
    "vendor": Category(
        name="vendor",
        ecosystem="PHP/Go/Ruby",
        description="Vendored dependencies",
        rule=_files("composer.json", "go.mod", "Gemfile"),
    ),
    "__pycache__": Category(
        name="__pycache__",
        ecosystem="Python",
        description="Python bytecode cache",
        rule=EvidenceRule(kind=RuleKind.ALWAYS),
    ),
    "bin": Category(
        name="bin",
        ecosystem=".NET",
        description="Compiled .NET binaries",
        rule=_DOTNET_PROJECT,
    ),
    "obj": Category(
        name="obj",
        ecosystem=".NET",
        description=".NET intermediate objects",
        rule=_DOTNET_PROJECT,
    ),
    ".dart_tool": Category(
        name=".dart_tool",
        ecosystem="Dart/Flutter",
        description="Dart tool state and generated code",
        rule=_files("pubspec.yaml"),
    ),
    ".angular": Category(
        name=".angular",
        ecosystem="Angular",
        description="Angular CLI build cache",
        rule=_files("angular.json"),
    ),
    ".next": Category(
        name=".next",
        ecosystem="Next.js",
        description="Next.js build output and cache",
        rule=_files("next.config.js", "next.config.ts"),
    ),
    ".nuxt": Category(
        name=".nuxt",
        ecosystem="Nuxt.js",
        description="Nuxt.js build output",
        rule=_files("nuxt.config.js", "nuxt.config.ts"),
    ),
}


def is_candidate_name(name: str) -> bool:
    """Check whether a directory name is one of the purgeable folder names."""
    return name in CATEGORIES


def get_category(name: str) -> Category | None:
    """Get a category by directory name."""
    return CATEGORIES.get(name)


def get_all_categories() -> list[Category]:
    """Get all categories."""
    return list(CATEGORIES.values())


def markers_fingerprint(categories: dict[str, Category] | None = None) -> str:
    """
    Stable digest of the marker names and their evidence rules.

    Stored alongside cached scans so that results produced under a different
    marker table are not reused.
    """
    table = CATEGORIES if categories is None else categories
    payload = {name: cat.rule.model_dump(mode="json") for name, cat in sorted(table.items())}
    return sha1(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()
