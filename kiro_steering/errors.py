from pathlib import Path
from typing import Optional


class ResolverError(Exception):
    """Base error for rule and hook resolution."""


class PatternSyntaxError(ResolverError):
    def __init__(self, pattern: str, detail: str, path: Optional[Path] = None) -> None:
        self.pattern = pattern
        self.detail = detail
        self.path = path
        message = f"Invalid glob {pattern!r} ({detail})"
        if path is not None:
            message = f"{message}: {path}"
        super().__init__(message)

    def with_path(self, path: Path) -> "PatternSyntaxError":
        return PatternSyntaxError(self.pattern, self.detail, path=path)


class ResolverFileError(ResolverError):
    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        self.message = message
        super().__init__(f"{message}: {path}")


class UnreadableFileError(ResolverFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Unreadable file ({detail})")


class MalformedFrontMatterError(ResolverFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Malformed front matter ({detail})")


class SchemaValidationError(ResolverFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid hook schema ({detail})")


class InvalidJsonFormatError(SchemaValidationError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        ResolverFileError.__init__(self, path=path, message=f"Invalid JSON format ({detail})")


class InvalidConfigSchemaError(ResolverFileError):
    def __init__(self, path: Path, detail: str) -> None:
        self.detail = detail
        super().__init__(path=path, message=f"Invalid config schema ({detail})")


class LoadIOError(ResolverError):
    def __init__(self, path: Path, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Cannot load {path} ({detail})")
