"""Required-file rules per assignment type and the matching logic for them."""

import json
from typing import Dict, Iterable, List, Optional, Tuple

import config
from utils.logger import get_logger
from utils.error_handler import ConfigError

logger = get_logger()

WEB_DEVELOPMENT = "Web Development"
INDEX_RULE = "index.html"
INDEX_LABEL = "index.html/index.php"
INDEX_NAMES = ("index.html", "index.php")

_rules_cache: Optional[Dict[str, List[str]]] = None

def load_rules(rules_file: Optional[str] = None) -> Dict[str, List[str]]:
    """Returns the default rules merged with the categories from a JSON file.

    The file maps assignment type names to lists of rules; a category in the
    file replaces the default one of the same name.

    Raises:
        ConfigError: If the file cannot be read or has the wrong shape.
    """
    rules = {name: list(required) for name, required in config.DEFAULT_RULES.items()}
    if not rules_file:
        return rules

    logger.info(f"Loading assignment rules from {rules_file}")
    try:
        with open(rules_file, 'r', encoding='utf-8') as f:
            custom = json.load(f)
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read rules file {rules_file}: {e}") from e

    if not isinstance(custom, dict):
        raise ConfigError(f"Rules file {rules_file} must contain a JSON object.")
    for name, required in custom.items():
        if not isinstance(required, list) or not all(isinstance(r, str) for r in required):
            raise ConfigError(f"Rules for '{name}' must be a list of strings.")
        rules[name] = list(required)
    return rules

def get_all_rules() -> Dict[str, List[str]]:
    """Returns the active rule table, loading config.RULES_FILE once."""
    global _rules_cache
    if _rules_cache is None:
        _rules_cache = load_rules(config.RULES_FILE)
    return _rules_cache

def get_assignment_types() -> List[str]:
    return list(get_all_rules())

def get_rules(assignment_type: str) -> List[str]:
    """Returns the required rules for an assignment type; unknown types need nothing."""
    return list(get_all_rules().get(assignment_type, []))

def _basename(path: str) -> str:
    return path.split('/')[-1].lower()

def is_extension_rule(rule: str) -> bool:
    return rule.startswith('.')

def is_index_rule(rule: str, assignment_type: str) -> bool:
    return assignment_type == WEB_DEVELOPMENT and rule == INDEX_RULE

def rule_label(rule: str, assignment_type: str) -> str:
    return INDEX_LABEL if is_index_rule(rule, assignment_type) else rule

def rule_matches(rule: str, paths: Iterable[str], assignment_type: str) -> bool:
    """Checks a single rule against a collection of file paths."""
    if is_index_rule(rule, assignment_type):
        return any(_basename(p) in INDEX_NAMES for p in paths)
    if is_extension_rule(rule):
        return any(p.lower().endswith(rule.lower()) for p in paths)
    return any(_basename(p) == rule.lower() for p in paths)

def _dedupe(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))

def match_rules(paths: List[str], required: List[str], assignment_type: str) -> Tuple[List[str], List[str]]:
    """Splits the required rules into those satisfied by `paths` and those missing.

    Returns:
        (found, missing) as lists of rule labels, deduplicated in rule order.
    """
    found, missing = [], []
    for rule in required:
        label = rule_label(rule, assignment_type)
        if rule_matches(rule, paths, assignment_type):
            found.append(label)
        else:
            missing.append(label)
    return _dedupe(found), _dedupe(missing)

def find_project_dirs(paths: Iterable[str]) -> List[str]:
    """Lists the conventional project directories that appear in `paths`."""
    seen = set()
    for path in paths:
        # The last component is the file itself
        for part in path.split('/')[:-1]:
            seen.add(part.lower())
    return [d for d in config.PROJECT_DIRS if d in seen]
