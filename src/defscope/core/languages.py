from pathlib import Path

_LANGUAGE_ALIASES = {
    "go": "go",
    "golang": "go",
    "javascript": "javascript",
    "js": "javascript",
    "jsx": "javascript",
    "javascriptreact": "javascript",
    "python": "python",
    "py": "python",
    "ts": "typescript",
    "typescript": "typescript",
    "tsx": "tsx",
    "typescriptreact": "tsx",
}

_EXTENSION_LANGUAGE_MAP = {
    ".cjs": "javascript",
    ".go": "go",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".py": "python",
    ".pyi": "python",
    ".pyw": "python",
    ".ts": "typescript",
    ".tsx": "tsx",
}

_SUPPORTED_LANGUAGES = set(_LANGUAGE_ALIASES.values())

# Languages whose definition headers may span several lines and end with a colon.
_INDENTATION_SIGNIFICANT_LANGUAGES = frozenset({"python"})


def normalize_language(language: str) -> str:
    normalized = language.strip().lower()
    resolved = _LANGUAGE_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language '{language}'. Supported: {sorted(_SUPPORTED_LANGUAGES)}")
    return resolved


def detect_language_from_path(file_path: Path) -> str:
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_LANGUAGE_MAP:
        return _EXTENSION_LANGUAGE_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def resolve_language(language: str | None, file_path: Path | None) -> str:
    if language:
        return normalize_language(language)
    if file_path:
        return detect_language_from_path(file_path)
    raise ValueError("Language must be provided when no file path is available.")


def is_indentation_significant(language: str) -> bool:
    return language in _INDENTATION_SIGNIFICANT_LANGUAGES
