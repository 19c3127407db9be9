"""Prompt for the information line: context, persona instruction, question, answer cue."""

# The answering model is steered only by this wording; keep it verbatim.
SYSTEM_INSTRUCTION = (
    "You are a Disaster Response Information AI. Answer the following user question "
    "based ONLY on the information provided above. If the information isn't present, "
    "say you cannot answer specifically but provide general safety advice relevant to "
    "disaster situations if appropriate. Be calm and clear."
)

SEPARATOR = "---"
ANSWER_CUE = "Answer:"


def compose_prompt(context_block: str, user_question: str) -> str:
    return (
        f"{context_block}\n"
        f"{SEPARATOR}\n"
        f"{SYSTEM_INSTRUCTION}\n\n"
        f'User Question: "{user_question}"\n\n'
        f"{ANSWER_CUE}"
    )
