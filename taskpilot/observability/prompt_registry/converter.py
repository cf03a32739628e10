"""
LangChain to Langfuse prompt converter.

Exports LangChain text templates with Langfuse's double-brace variables.
The reverse direction is handled by Langfuse's own get_langchain_prompt().

Dependencies: langchain_core.prompts
System role: Template format conversion for prompt registration
"""

import re

from langchain_core.prompts import PromptTemplate

_LANGCHAIN_VARIABLE = re.compile(r"(?<!\{)\{([A-Za-z_][A-Za-z0-9_]*)\}(?!\})")


def convert_text_template(template: PromptTemplate) -> str:
    """
    Convert LangChain PromptTemplate to Langfuse text format.

    Example:
        >>> template = PromptTemplate.from_template("Extract from {document}")
        >>> convert_text_template(template)
        'Extract from {{document}}'
    """
    return _LANGCHAIN_VARIABLE.sub(r"{{\1}}", template.template)
