"""Single-task flow shared by the one-shot CLI and the REPL."""

import logging

from clawcode.agents.planner import Planner
from clawcode.agents.scanner import DEFAULT_MAX_FILES, ProjectScanner
from clawcode.cli import ui
from clawcode.config import get_clawcode_dir, read_config, resolve_provider_configs, select_provider
from clawcode.memory import MemoryManager
from clawcode.models import ProviderConfig, TaskSummary
from clawcode.orchestrator import AgentEmitter, SessionContext, build_graph, make_initial_state
from clawcode.orchestrator.graph import ConfirmFn

logger = logging.getLogger(__name__)


def resolve_provider(
    session: SessionContext,
    requested: str | None = None,
    model: str | None = None,
) -> ProviderConfig:
    """Select the provider for the next task and cache the choice on the session.

    Raises:
        ProviderConfigError: If no matching provider is configured.
    """
    file_config = read_config()
    available = resolve_provider_configs(file_config)
    default = file_config.default_provider if file_config is not None else None
    provider_config = select_provider(available, requested, session.cached_provider, default)
    if model:
        provider_config = provider_config.model_copy(update={"model": model})
    session.cached_provider = provider_config.provider
    logger.info("Using provider %s", provider_config.provider)
    return provider_config


def execute_task(
    session: SessionContext,
    task: str,
    dry_run: bool = False,
    auto_approve: bool = False,
    provider: str | None = None,
    model: str | None = None,
    max_files: int = DEFAULT_MAX_FILES,
    verbose: bool = False,
    emitter: AgentEmitter | None = None,
    confirm: ConfirmFn | None = ui.confirm,
) -> TaskSummary:
    """Run one task end to end in ``session.root_dir``.

    Args:
        session: Session owning the project root, busy flag and cached provider.
        task: What the user asked for.
        dry_run: Show plan and diffs only.
        auto_approve: Skip confirmation prompts.
        provider: Explicit provider name, overriding the session and config.
        model: Model override for the selected provider.
        max_files: Scanner file limit.
        verbose: Also render on-demand file reads.
        emitter: Event emitter; console listeners are attached to it for
            the duration of the task.
        confirm: Yes/no prompt used for patches and commands.

    Returns:
        TaskSummary describing the outcome.

    Raises:
        TaskInProgressError: If the session is already running a task.
        ProviderConfigError: If no provider is usable.
        GraphBuildError: If the pipeline cannot be built.
    """
    with session.begin_task():
        provider_config = resolve_provider(session, provider, model)
        planner = Planner(provider_config)
        emitter = emitter or AgentEmitter()
        detach = ui.attach_console(emitter, verbose=verbose)
        try:
            graph = build_graph(
                scanner=ProjectScanner(max_files=max_files),
                planner=planner,
                emitter=emitter,
                memory=MemoryManager(get_clawcode_dir()),
                confirm=confirm,
            )
            result = graph.invoke(
                make_initial_state(
                    task=task,
                    root_dir=session.root_dir,
                    dry_run=dry_run,
                    auto_approve=auto_approve,
                )
            )
        finally:
            detach()

    errors = result.get("errors", [])
    return TaskSummary(
        task=task,
        provider=provider_config.provider,
        success=not errors,
        files_modified=result.get("files_modified", []),
        message=result.get("message", ""),
        error=errors[0] if errors else None,
    )
