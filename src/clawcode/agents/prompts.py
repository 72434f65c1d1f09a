"""System and user prompt builders for the plan request."""

from clawcode.models import ScannedFile

MAX_FILE_LIST_IN_PROMPT = 60

PLAN_JSON_SCHEMA = """
The response must be a single JSON object with this exact shape (no markdown, no code fence):
{
  "analysis": "string: brief analysis of the task and approach",
  "files_to_edit": [
    { "path": "relative/file/path", "reason": "why this file" }
  ],
  "patches": [
    {
      "file": "relative/path/to/file",
      "operation": "replace",
      "find": "exact string to find in file (preserve whitespace)",
      "replace": "exact string to put in its place"
    }
  ],
  "commands": ["shell command 1", "shell command 2"],
  "agent_notes": ["optional string notes to persist for future runs"]
}
Rules: "file" in patches must be one of the paths in files_to_edit or from the context. \
agent_notes is optional. Use exact string match for find/replace. commands are optional \
shell commands to run after edits.
"""


def build_system_prompt() -> str:
    return f"""You are a precise coding agent. You receive a task and minimal project context \
(file paths and contents of relevant files only).

Your job is to produce a single JSON object (no markdown, no code fence) with:
1. analysis: Short explanation of the task and your approach.
2. files_to_edit: List of {{ path, reason }} for files you will change (paths relative to project root).
3. patches: List of edits. Each has: file (relative path), operation: "replace", find (exact string \
in file), replace (exact replacement). Use exact string match; preserve indentation and newlines.
4. commands: Optional list of shell commands to run after edits (e.g. a build or test command).

Rules:
- Only reference files that were provided in the context (or a new file path to create).
- For patches, "find" must appear exactly in the given file content. For new or empty files, \
use "find": "" and "replace": "<full new content>".
- Prefer minimal, surgical edits. One patch per logical change when possible.
- Output only the JSON object, no other text.
{PLAN_JSON_SCHEMA}"""


def build_user_prompt(
    task: str,
    file_list: list[str],
    selected_files: list[ScannedFile],
    memory_context: str = "",
) -> str:
    """Build the user message: memory, task, file listing and selected contents.

    Args:
        task: The user's task description.
        file_list: Project file listing; only the first 60 entries are sent.
        selected_files: Files whose full content is included.
        memory_context: Optional rendered context memory block.

    Returns:
        Prompt text.
    """
    file_list_blurb = "Project files (relative paths):\n" + "\n".join(
        file_list[:MAX_FILE_LIST_IN_PROMPT]
    )
    file_contents = "\n".join(
        f"--- {file.relative_path} ---\n{file.content}\n" for file in selected_files
    )
    memory_block = memory_context + "\n\n" if memory_context.strip() else ""
    return (
        f"{memory_block}Task:\n{task}\n\n{file_list_blurb}\n\n"
        f"Relevant file contents (use only these for patches):\n{file_contents}\n\n"
        "Produce the JSON plan."
    )
