"""Clone and refresh the local cache of a block repository.

Every git step runs to completion before the next one starts. A failing step
marks the reporter failed and raises ``RepoSyncError``; nothing is rolled back.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from block_scaffold.blocks.giturl import parse_git_url
from block_scaffold.blocks.models import CloneContext
from block_scaffold.cli.ui import ProgressReporter
from block_scaffold.core.config import DEFAULT_BRANCH, SUBMODULE_MARKER
from block_scaffold.errors import RepoSyncError

logger = logging.getLogger(__name__)


def is_submodule_repo(template_tmp_dir_path: Path) -> bool:
    """Return True when the clone declares git submodules."""
    return (Path(template_tmp_dir_path) / SUBMODULE_MARKER).exists()


def _first_line(text: str) -> str:
    for line in text.splitlines():
        stripped = line.strip()
        if stripped:
            return stripped
    return ""


def _run_git(step: str, args: list[str], cwd: Path) -> None:
    """Run one git step in ``cwd`` and raise ``RepoSyncError`` on failure."""
    logger.debug("git %s (cwd=%s)", " ".join(args), cwd)
    try:
        completed = subprocess.run(
            ["git", *args],
            cwd=str(cwd),
            env=os.environ.copy(),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except (FileNotFoundError, NotADirectoryError) as exc:
        if not Path(cwd).is_dir():
            raise RepoSyncError(step, f"Working directory does not exist: {cwd}") from exc
        raise RepoSyncError(step, "git executable not found on PATH", returncode=127) from exc

    if completed.returncode != 0:
        detail = (completed.stderr or "").strip() or _first_line(completed.stdout or "")
        message = f"Command failed with exit code {completed.returncode}: git {' '.join(args)}"
        if detail:
            message += f"\n{detail}"
        logger.warning("git %s failed in %s", step, cwd)
        raise RepoSyncError(step, message, returncode=completed.returncode)


def _step(reporter: ProgressReporter, step: str, args: list[str], cwd: Path) -> None:
    try:
        _run_git(step, args, cwd)
    except RepoSyncError:
        reporter.fail()
        raise


def git_update(ctx: CloneContext, reporter: ProgressReporter) -> None:
    """Refresh an existing clone: fetch, checkout, pull, then submodules."""
    cwd = ctx.template_tmp_dir_path

    reporter.start("🚒  Git fetch")
    _step(reporter, "fetch", ["fetch"], cwd)
    reporter.succeed()

    reporter.start(f"🚛  Git checkout {ctx.branch}")
    _step(reporter, "checkout", ["checkout", ctx.branch], cwd)
    reporter.succeed()

    reporter.start("🚀  Git pull")
    _step(reporter, "pull", ["pull"], cwd)

    # Submodules can appear after a pull or a branch switch; init them here.
    if is_submodule_repo(cwd):
        reporter.succeed()
        reporter.start("👀  update submodule")
        _step(reporter, "submodule-init", ["submodule", "init"], cwd)
        _step(reporter, "submodule-update", ["submodule", "update", "--recursive", "--"], cwd)

    reporter.succeed()


def git_clone(ctx: CloneContext, reporter: ProgressReporter) -> None:
    """Clone ``ctx.repo`` into ``ctx.id`` below ``ctx.blocks_temp_path``."""
    reporter.start(f"🔍  clone git repo from {ctx.repo}")
    _step(
        reporter,
        "clone",
        ["clone", ctx.repo, ctx.id, "--single-branch", "--recurse-submodules", "-b", ctx.branch],
        ctx.blocks_temp_path,
    )
    reporter.succeed()


def build_clone_context(
    git_url: str,
    blocks_temp_path: Path,
    branch: str | None = None,
    *,
    default_branch: str = DEFAULT_BRANCH,
) -> CloneContext:
    """Derive the clone target for a block or repository URL.

    ``https://github.com/<owner>/<name>/tree/<branch>/<path>`` pins both the
    branch and the block's sub-directory. An explicit ``branch`` wins over the
    one in the URL, which wins over ``default_branch``. http(s) URLs are
    cloned with the scheme they were given in.
    """
    repo = parse_git_url(git_url)
    clone_id = f"{repo.host}/{repo.owner}/{repo.name}"
    if git_url.strip().startswith(("http://", "https://")):
        repo_url = repo.clone_url
    else:
        repo_url = git_url
    blocks_temp_path = Path(blocks_temp_path)
    return CloneContext(
        repo=repo_url,
        id=clone_id,
        branch=branch or repo.branch or default_branch,
        blocks_temp_path=blocks_temp_path,
        template_tmp_dir_path=blocks_temp_path / clone_id,
        path=repo.path,
    )


def sync_block_repo(ctx: CloneContext, reporter: ProgressReporter) -> Path:
    """Update the cached clone when present, otherwise clone it."""
    if ctx.template_tmp_dir_path.exists():
        logger.info("Updating cached block repository %s", ctx.template_tmp_dir_path)
        git_update(ctx, reporter)
    else:
        # git creates the <host>/<owner> parents of the clone id itself.
        ctx.blocks_temp_path.mkdir(parents=True, exist_ok=True)
        logger.info("Cloning %s into %s", ctx.repo, ctx.template_tmp_dir_path)
        git_clone(ctx, reporter)
    return ctx.template_tmp_dir_path


__all__ = [
    "build_clone_context",
    "git_clone",
    "git_update",
    "is_submodule_repo",
    "sync_block_repo",
]
