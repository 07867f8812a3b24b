# titanic_eda/analysis/decorators.py

from titanic_eda.analysis.registry import register_rule

def factor_rule(name, priority, explanation):
    """
    Decorator to mark a function as a factor-ranking rule,
    with its evaluation priority and explanation template.
    """
    def wrapper(fn):
        fn.factor_name = name
        fn.factor_priority = priority
        fn.factor_explanation = explanation
        register_rule(name, fn)
        return fn
    return wrapper
