"""Speaker-role classification via an ordered chain of heuristic rules."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence

from config_loader import get_nested
from documents import DocumentNode
from models import Role

AUTHOR_ROLE_ATTRIBUTE = 'data-message-author-role'

# Substring checks against the author-role marker, in priority order
AUTHOR_ROLE_MARKERS = (
    ('user', Role.USER),
    ('assistant', Role.ASSISTANT),
    ('system', Role.SYSTEM),
)

# Plain substring matches against the whole class string
ASSISTANT_CLASS_PATTERN = re.compile(r'assistant|bot', re.IGNORECASE)
USER_CLASS_PATTERN = re.compile(r'user|me|author-user', re.IGNORECASE)

USER_TEXT_PREFIX_PATTERN = re.compile(r'You\b')


@dataclass(frozen=True)
class RoleRule:
    """A named predicate that either decides a role or abstains with None."""

    name: str
    predicate: Callable[[DocumentNode], Optional[Role]]

    def __call__(self, node: DocumentNode) -> Optional[Role]:
        return self.predicate(node)


def role_from_author_marker(node: DocumentNode) -> Optional[Role]:
    """Decide from an explicit author-role marker attribute."""
    marker = node.get_attribute(AUTHOR_ROLE_ATTRIBUTE)
    if not marker:
        return None
    for needle, role in AUTHOR_ROLE_MARKERS:
        if needle in marker:
            return role
    return None


def role_from_class_markers(node: DocumentNode) -> Optional[Role]:
    """Decide from assistant-like or user-like class names."""
    class_string = node.get_attribute('class') or ''
    if not class_string:
        return None
    if ASSISTANT_CLASS_PATTERN.search(class_string):
        return Role.ASSISTANT
    if USER_CLASS_PATTERN.search(class_string):
        return Role.USER
    return None


def role_from_text_prefix(node: DocumentNode) -> Optional[Role]:
    """
    Weak fallback for older layouts without role markers.

    Some pages prefix user turns with a "You" label. This is locale and
    phrasing dependent, so it runs after every structural rule.
    """
    if USER_TEXT_PREFIX_PATTERN.match(node.text_content().lstrip()):
        return Role.USER
    return None


AUTHOR_MARKER_RULE = RoleRule('author-role-marker', role_from_author_marker)
CLASS_MARKER_RULE = RoleRule('class-marker', role_from_class_markers)
TEXT_PREFIX_RULE = RoleRule('text-prefix', role_from_text_prefix)

DEFAULT_RULES = (AUTHOR_MARKER_RULE, CLASS_MARKER_RULE, TEXT_PREFIX_RULE)


class RoleClassifier:
    """Evaluates role rules in order; the first decisive rule wins."""

    def __init__(
        self,
        rules: Sequence[RoleRule] = DEFAULT_RULES,
        default_role: Role = Role.ASSISTANT,
        logger: logging.Logger = None
    ):
        """
        Initialize role classifier.

        Args:
            rules: Rules in priority order
            default_role: Role used when no rule decides
            logger: Optional logger instance
        """
        self.rules = tuple(rules)
        self.default_role = default_role
        self.logger = logger or logging.getLogger('chat_transcript_exporter.converters.role_classifier')

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None, logger: logging.Logger = None) -> 'RoleClassifier':
        """Build a classifier honoring ``roles.text_prefix_heuristic``."""
        rules = DEFAULT_RULES
        if not get_nested(config or {}, 'roles.text_prefix_heuristic', True):
            rules = tuple(rule for rule in DEFAULT_RULES if rule is not TEXT_PREFIX_RULE)
        return cls(rules=rules, logger=logger)

    def classify(self, node: DocumentNode) -> Role:
        """
        Classify the speaker of a candidate node.

        Args:
            node: Candidate message node

        Returns:
            Decided role, or the default role when no rule matched
        """
        for rule in self.rules:
            role = rule(node)
            if role is not None:
                self.logger.debug(f"Rule '{rule.name}' classified node as {role.value}")
                return role
        return self.default_role
