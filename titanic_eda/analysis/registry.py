"""
registry.py

Keeps the factor-ranking rules keyed by their factor name.
"""

FACTOR_RULES = {}

def register_rule(name: str, rule_fn):
    """
    Register a scoring rule under a factor name (e.g. 'Gender').
    """
    if name in FACTOR_RULES and FACTOR_RULES[name] is not rule_fn:
        raise ValueError(f"Factor rule '{name}' already registered.")
    FACTOR_RULES[name] = rule_fn

def get_rule(name: str):
    """
    Retrieve a rule by factor name, or raise an error if not found.
    """
    if name not in FACTOR_RULES:
        raise ValueError(f"Factor rule '{name}' not registered.")
    return FACTOR_RULES[name]

def ordered_rules():
    """
    All rules, lowest priority number first.
    """
    return sorted(FACTOR_RULES.values(), key=lambda fn: fn.factor_priority)
