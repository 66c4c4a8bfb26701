"""Prompt store: default templates, question content assembly and rendering."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from core.answers import option_letter
from core.documents import Problem

HINT = "hint"
SOLUTION = "solution"

QUESTION_CONTENT_TOKEN = "{{QUESTION_CONTENT}}"
HINT_INSTRUCTIONS_TOKEN = "{{HINT_INSTRUCTIONS}}"
PREVIOUS_HINTS_TOKEN = "{{PREVIOUS_HINTS}}"  # older templates

DEFAULT_SOLUTION_PROMPT = """You are a very smart student, attempting the Joint Entrance Examination (JEE) Advanced of the Indian Institutes of Technology (IIT).

Read the instructions below carefully, and then answer the question.

IMPORTANT: Mathematical equations in the question are written in LaTeX notation (e.g., $x^2$ for inline math, $$E=mc^2$$ for display math). Parse and interpret them correctly.

The question may reference a diagram. If there is a discrepancy between the text and any diagram description, you should use the information from the text.

Remember that the questions are constructed very carefully, and do not contain any errors - so read the question carefully and answer the question as asked.

---

{{QUESTION_CONTENT}}

---

Answer the question above.

Follow carefully any instructions given in the question.

Ensure that your solution ends with the sentence of the form:
'The correct answer is ...', where ... is your answer.

If the question is a multiple choice question, your answer should be the letter corresponding to the correct answer."""

DEFAULT_HINT_PROMPT = """You are a very smart student, attempting the Joint Entrance Examination (JEE) Advanced of the Indian Institutes of Technology (IIT).

Read the instructions below carefully, provide one hint that would allow reattempting the question. DO NOT PROVIDE THE ANSWER. The goal of the hint is to tell the student specific and sharp problem solving steps - focus on these and not on explaining theory. After each hint show one step of the solution.

IMPORTANT: Mathematical equations in the question are written in LaTeX notation (e.g., $x^2$ for inline math, $E=mc^2$ for display math). Parse and interpret them correctly.

The question may reference a diagram. If there is a discrepancy between the text and any diagram description, you should use the information from the text.

Remember that the questions are constructed very carefully, and do not contain any errors - so read the question and follow instructions very carefully.

---

{{QUESTION_CONTENT}}

---

{{HINT_INSTRUCTIONS}}"""

FIRST_HINT_INSTRUCTIONS = (
    "Provide a helpful hint to guide toward solving this problem. "
    "Do NOT reveal the final answer."
)
NEXT_HINT_INSTRUCTIONS = (
    "Provide the next hint that builds on the previous hints above. "
    "Make it progressively more specific and detailed. "
    "Do NOT repeat information already given. Do NOT reveal the final answer."
)


@dataclass(frozen=True)
class PromptDefaults:
    hint_template: str = DEFAULT_HINT_PROMPT
    solution_template: str = DEFAULT_SOLUTION_PROMPT


def get_defaults() -> PromptDefaults:
    return PromptDefaults()


@dataclass(frozen=True)
class PromptSettings:
    """Templates chosen in the prompt manager; start as the defaults."""

    hint_template: str = DEFAULT_HINT_PROMPT
    solution_template: str = DEFAULT_SOLUTION_PROMPT
    defaults: PromptDefaults = field(default_factory=get_defaults)

    @property
    def hint_modified(self) -> bool:
        return self.hint_template != self.defaults.hint_template

    @property
    def solution_modified(self) -> bool:
        return self.solution_template != self.defaults.solution_template

    def custom_prompt(self, kind: str) -> str | None:
        """Template to forward to the gateway, or None to use its default."""
        if kind == HINT:
            return self.hint_template if self.hint_modified else None
        return self.solution_template if self.solution_modified else None

    def update(
        self,
        hint_template: str | None = None,
        solution_template: str | None = None,
    ) -> PromptSettings:
        changes: dict[str, str] = {}
        if hint_template is not None:
            changes["hint_template"] = hint_template
        if solution_template is not None:
            changes["solution_template"] = solution_template
        return replace(self, **changes)

    def reset(self) -> PromptSettings:
        return PromptSettings(
            hint_template=self.defaults.hint_template,
            solution_template=self.defaults.solution_template,
            defaults=self.defaults,
        )


@dataclass(frozen=True)
class GenerationRequest:
    question_text: str
    kind: str = SOLUTION
    passage_text: str | None = None
    options: tuple[str, ...] = ()
    previous_hints: tuple[str, ...] = ()
    custom_prompt: str | None = None

    @classmethod
    def for_problem(
        cls,
        problem: Problem,
        kind: str,
        previous_hints: Sequence[str] = (),
        custom_prompt: str | None = None,
    ) -> GenerationRequest:
        return cls(
            question_text=problem.text,
            kind=kind,
            passage_text=problem.passage_text,
            options=tuple(option.text for option in problem.options),
            previous_hints=tuple(previous_hints) if kind == HINT else (),
            custom_prompt=custom_prompt,
        )


def build_question_content(
    question_text: str,
    passage_text: str | None = None,
    options: Sequence[str] = (),
) -> str:
    content = ""
    if passage_text:
        content += f"**Passage:**\n{passage_text}\n\n"
    content += f"**Question:**\n{question_text}\n\n"
    if options:
        content += "**Options:**\n"
        for index, text in enumerate(options):
            content += f"{option_letter(index)}. {text}\n"
    return content


def build_hint_instructions(previous_hints: Sequence[str]) -> str:
    if not previous_hints:
        return FIRST_HINT_INSTRUCTIONS
    lines = [f"Hint {index}: {hint}" for index, hint in enumerate(previous_hints, start=1)]
    return "Previously given hints:\n" + "\n".join(lines) + "\n\n" + NEXT_HINT_INSTRUCTIONS


def render_prompt(template: str, question_content: str, hint_instructions: str) -> str:
    """Substitute the first occurrence of each placeholder token."""
    return (
        template.replace(QUESTION_CONTENT_TOKEN, question_content, 1)
        .replace(HINT_INSTRUCTIONS_TOKEN, hint_instructions, 1)
        .replace(PREVIOUS_HINTS_TOKEN, hint_instructions, 1)
    )


def assemble_prompt(
    request: GenerationRequest, defaults: PromptDefaults | None = None
) -> str:
    defaults = defaults or get_defaults()
    default_template = (
        defaults.hint_template if request.kind == HINT else defaults.solution_template
    )
    template = request.custom_prompt or default_template
    content = build_question_content(
        request.question_text, request.passage_text, request.options
    )
    return render_prompt(template, content, build_hint_instructions(request.previous_hints))
