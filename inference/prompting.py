"""
Answer prompt template.

The template carries persona, tone and length guidance for the oracle.
It is configuration (ORACLE_PROMPT_TEMPLATE), not logic: build_prompt()
only substitutes the user's question into it.
"""

QUESTION_PLACEHOLDER = "{question}"

DEFAULT_PROMPT_TEMPLATE = (
    "You are a Nepali constitutional rights expert. "
    "Answer clearly in under 120 words:\n{question}"
)


def build_prompt(question: str, template: str = DEFAULT_PROMPT_TEMPLATE) -> str:
    """
    Wrap a question in the prompt template.

    Templates without a {question} placeholder get the question appended
    on its own line. Other braces in the template are left untouched.
    """
    if QUESTION_PLACEHOLDER in template:
        return template.replace(QUESTION_PLACEHOLDER, question)
    return f"{template}\n{question}"
