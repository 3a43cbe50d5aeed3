from models import PositionStrategy, ReviewMode


def review_instructions(language: str) -> str:
    return f"""
Context: This project is a web-based ERP system built using {language}.
You are an experienced senior software engineer acting as an automated code reviewer.
You will receive one or more source code diffs from a Pull Request.

Your task:
- Analyze only the changed code (not the entire file).
- Provide a professional, concise, and actionable code review in Markdown format.

Focus on the following criteria:

1. **Code Standard & Style**
- Check if the code follows clean coding conventions.
- Identify inconsistent indentation, spacing, or bad formatting.
- Verify naming conventions according to the language standards in use.
- Detect "magic numbers", deeply nested code, or unclear function structures.

2. **Readability & Naming**
- Evaluate whether variable, method, and class names are descriptive and meaningful.
- Highlight any ambiguous or confusing naming.
- Suggest clearer alternatives where appropriate.

3. **Security & Robustness**
- Detect missing null checks, unvalidated inputs, or unsafe assumptions.
- Check for missing try/catch or improper exception handling.
- Identify potential SQL injection, XSS, or insecure data handling.
- Ensure sensitive data (passwords, tokens, API keys) are not exposed.

4. **Performance & Optimization**
- Identify inefficient loops, redundant computations, or unnecessary allocations.
- Suggest refactoring or using more optimal data structures or APIs.
- For front-end code, note inefficient DOM manipulation or heavy re-renders.

5. **Best Practices**
- Check if code is modular, reusable, and easy to test.
- Identify potential violations of SOLID, DRY, or KISS principles.
- Suggest adding comments or documentation if logic is complex.
"""


SUMMARY_FORMAT = """
Format your response as follows:

### 🔍 Summary
Give a short summary (2-3 lines) of your general impression.

### 💬 Detailed Review
List bullet points with specific findings, grouped by category if possible.

### ✅ Suggestions
Propose concrete improvements or refactor ideas.

If the code is already good, say so explicitly and mention what's done well.
"""

_INLINE_RULES = """
Rules:
- Only comment on lines starting with "+" (added or changed lines).
- Skip trivial stylistic issues (like missing semicolon).
- Return [] if everything is good.
- Do not wrap your response in markdown. Do not say anything else.
"""

INLINE_FORMAT_LINE = """
Return ONLY a **pure JSON array**, no markdown, no text before or after.
Format:
[
  {
    "file": "filename.extension",
    "line": <line number in the NEW version of the file (integer)>,
    "comment": "clear actionable feedback"
  }
]

How to find "line":
- Each hunk header "@@ -a,b +c,d @@" means the first new-file line of that hunk is c.
- Count forward from c over lines starting with "+" or " "; skip lines starting with "-".
""" + _INLINE_RULES

INLINE_FORMAT_POSITION = """
Return ONLY a **pure JSON array**, no markdown, no text before or after.
Format:
[
  {
    "file": "filename.extension",
    "position": <the correct diff line index (integer), based on the provided patch (NOT the original file line number)>,
    "comment": "clear actionable feedback"
  }
]

How to find "position":
- Count from the first "@@" line of that file's patch (that line = position 1).
- Every following line of the patch counts, including removed lines and later "@@" lines.
- The "position" must match the line's index **within the diff**, not the real file.
""" + _INLINE_RULES


def inline_format(strategy: PositionStrategy) -> str:
    if strategy is PositionStrategy.MODEL:
        return INLINE_FORMAT_POSITION
    return INLINE_FORMAT_LINE


def build_prompt(language: str, mode: ReviewMode, diff_text: str,
                 strategy: PositionStrategy = PositionStrategy.RESOLVE) -> str:
    if mode is ReviewMode.INLINE:
        output_format = inline_format(strategy)
    elif mode is ReviewMode.SUMMARY:
        output_format = SUMMARY_FORMAT
    else:
        raise ValueError(f"no single prompt for mode {mode.value!r}")
    return f"{review_instructions(language)}\n\n{output_format}\n\n{diff_text}"
