"""Parser for Go go.mod files."""

import json
import re
from pathlib import Path
from typing import List, Optional, Tuple

from license_report.exceptions import ManifestReadError
from license_report.logging_config import logger

from ..models import SCOPE_INDIRECT, SCOPE_RUNTIME, DependencyRecord, ManifestType, ParsedManifest, ProjectDescriptor
from ._common import matches_manifest_name, read_manifest_text

# Quoted strings, raw strings, block parentheses, or bare words
_TOKEN_RE = re.compile(r'"(?:[^"\\]|\\.)*"|`[^`]*`|[()]|[^\s()"`]+')


def _split_comment(line: str) -> Tuple[str, str]:
    """Split a line into code and the text of a trailing // comment."""
    quote: Optional[str] = None
    i = 0
    while i < len(line):
        ch = line[i]
        if quote:
            if ch == "\\" and quote == '"':
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "`"):
            quote = ch
        elif line.startswith("//", i):
            return line[:i], line[i + 2 :]
        i += 1
    return line, ""


def _unquote(token: str) -> str:
    if token.startswith("`") and token.endswith("`") and len(token) >= 2:
        return token[1:-1]
    if token.startswith('"'):
        try:
            return json.loads(token)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid quoted string {token}") from e
    return token


class GoModParser:
    """
    Parser for go.mod module files.

    Reads the module directive and every require entry (single-line and
    block form) in file order. Entries marked "// indirect" are kept and
    tagged with the indirect scope. Other directives (go, toolchain,
    replace, exclude, retract, ...) are skipped.
    """

    name = "go.mod"
    manifest_type = ManifestType.GO_MOD

    def supports(self, path: Path) -> bool:
        return matches_manifest_name(path, "go.mod")

    def parse(self, path: Path) -> ParsedManifest:
        content = read_manifest_text(path)
        try:
            module_path, dependencies = self._parse_content(content)
        except ValueError as e:
            raise ManifestReadError(f"Malformed go.mod {path}: {e}") from e

        logger.debug(f"Parsed {len(dependencies)} requirements from {path}")
        return ParsedManifest(
            path=path,
            manifest_type=self.manifest_type,
            project=ProjectDescriptor(raw_name=module_path, suffix=self.manifest_type.project_suffix),
            dependencies=dependencies,
        )

    def _parse_content(self, content: str) -> Tuple[str, List[DependencyRecord]]:
        module_path: Optional[str] = None
        dependencies: List[DependencyRecord] = []
        block: Optional[str] = None
        block_start = 0

        for lineno, raw_line in enumerate(content.splitlines(), start=1):
            code, comment = _split_comment(raw_line)
            tokens = _TOKEN_RE.findall(code)
            if not tokens:
                continue

            if block is not None:
                if tokens == [")"]:
                    block = None
                    continue
                directive, args = block, tokens
            else:
                directive, args = tokens[0], tokens[1:]
                if args == ["("]:
                    block = directive
                    block_start = lineno
                    continue

            if directive == "module":
                if len(args) != 1:
                    raise ValueError(f"line {lineno}: usage: module module/path")
                module_path = _unquote(args[0])
            elif directive == "require":
                if len(args) != 2:
                    raise ValueError(f"line {lineno}: usage: require module/path v1.2.3")
                name = _unquote(args[0])
                version = _unquote(args[1])
                if not name:
                    logger.debug(f"Skipping require with empty module path on line {lineno}")
                    continue
                scope = SCOPE_INDIRECT if comment.strip().startswith("indirect") else SCOPE_RUNTIME
                dependencies.append(
                    DependencyRecord(
                        name=name,
                        version_constraint=version,
                        ecosystem=self.manifest_type.ecosystem,
                        scope=scope,
                    )
                )

        if block is not None:
            raise ValueError(f"line {block_start}: unterminated {block} block")
        if not module_path:
            raise ValueError("missing module directive")

        return module_path, dependencies
