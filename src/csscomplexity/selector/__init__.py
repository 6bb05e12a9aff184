from csscomplexity.selector.parser import (
    SelectorSyntaxError,
    calculate_selector_depth,
    calculate_specificity,
    parse_selector,
    parse_selector_ast,
    split_selector_list,
)

__all__ = [
    "SelectorSyntaxError",
    "calculate_selector_depth",
    "calculate_specificity",
    "parse_selector",
    "parse_selector_ast",
    "split_selector_list",
]
