"""Prism artifact generators.

Deterministic templating over extracted entities: PlantUML diagrams,
pseudocode in two styles and test-case stubs. No network access.
"""

from prism.generators.pseudocode import generate_pseudocode
from prism.generators.templates import TemplateRenderer
from prism.generators.test_cases import generate_test_cases
from prism.generators.uml import (
    generate_class_diagram,
    generate_sequence,
    generate_uml,
    generate_use_case,
    should_actor_connect_to_action,
)

__all__ = [
    "TemplateRenderer",
    "generate_class_diagram",
    "generate_pseudocode",
    "generate_sequence",
    "generate_test_cases",
    "generate_uml",
    "generate_use_case",
    "should_actor_connect_to_action",
]
