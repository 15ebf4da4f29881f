"""Rewrite Sprint.ly cross-references in markdown to JIRA link notation."""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Mapping

logger: logging.Logger = logging.getLogger(__name__)

# Alternatives are tried left to right at each position, so an already
# converted JIRA link, or a markdown link to another site, is consumed whole
# before a "#123" in its text can match.
_REFERENCE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(?P<jira>\[[^\[\]|]*\|[^\[\]\s]+\])"
    r"|(?P<link>\[(?P<text>[^\[\]]*)\]\((?P<url>[^()\s]*/product/(?P<project>\d+)/item/(?P<item>\d+)[^()\s]*)\))"
    r"|(?P<other>\[[^\[\]]*\]\([^()\s]*\))"
    r"|(?<![\w&/\[])#(?P<mention>\d+)\b"
)


class MarkdownRewriter:
    """Rewrites Sprint.ly item links and bare #123 mentions into JIRA links.

    Rewriting is best-effort: links to projects missing from the project map are
    left as they are.
    """

    def __init__(
        self,
        project_map: Mapping[int, str],
        jira_base_url: str,
        default_project_key: str,
        *,
        warn_unmapped_projects: bool = True,
    ) -> None:
        self.project_map: Mapping[int, str] = project_map
        self.jira_base_url: str = jira_base_url.rstrip("/")
        self.default_project_key: str = default_project_key
        self.warn_unmapped_projects: bool = warn_unmapped_projects

    def browse_url(self, project_key: str, item_number: int | str) -> str:
        return f"{self.jira_base_url}/browse/{project_key}-{item_number}"

    def rewrite(self, text: str, *, project_key: str | None = None, context: str = "") -> str:
        """Rewrite cross-references in text.

        Args:
            text: Markdown text from Sprint.ly
            project_key: JIRA key of the project the text belongs to, used for
                bare #123 mentions (defaults to the project being migrated)
            context: Context for log messages (e.g., "item #5")

        Returns:
            Text with references in JIRA notation; other text is unchanged.
        """
        if not text:
            return text
        own_key = project_key or self.default_project_key

        def replace(match: re.Match[str]) -> str:
            if match.group("jira") or match.group("other"):
                return match.group(0)
            if match.group("link"):
                project_num = int(match.group("project"))
                target_key = self.project_map.get(project_num)
                if target_key is None:
                    if self.warn_unmapped_projects:
                        ctx = f" in {context}" if context else ""
                        logger.warning(f"Sprint.ly project {project_num} not in projectMap, link left as is{ctx}")
                    return match.group(0)
                return f"[{match.group('text')}|{self.browse_url(target_key, match.group('item'))}]"
            number = match.group("mention")
            return f"[#{number}|{self.browse_url(own_key, number)}]"

        return _REFERENCE_PATTERN.sub(replace, text)
