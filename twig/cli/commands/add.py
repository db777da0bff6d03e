"""Add command - stage files for commit."""

from pathlib import Path

import click

from twig.cli.context import open_repository
from twig.cli.output import success, error, info, warning
from twig.utils.fs import to_posix

CONFLICT_MARKERS = ('<<<<<<< HEAD', '>>>>>>> ')


def has_conflict_markers(file_path: Path) -> bool:
    """Check if a file still contains conflict markers."""
    content = file_path.read_text(errors='replace')
    return all(marker in content for marker in CONFLICT_MARKERS)


@click.command('add')
@click.argument('paths', nargs=-1, required=True)
@click.option('-f', '--force', is_flag=True, help='Add ignored files')
def add_cmd(paths, force):
    """
    Add file contents to the staging area.

    Stage files for the next commit. Modified files must be added
    again to stage the new changes. Adding a tracked path that no
    longer exists stages its removal.

    Files matching patterns in .twigignore are skipped unless --force is used.

    Examples:
        twig add file.txt
        twig add src
        twig add .
        twig add -f ignored_file.txt
    """
    repo = open_repository()
    index = repo.index
    ignore = repo.worktree.ignore

    staged = []
    removed = []
    ignored = []
    failed = []

    for path_arg in paths:
        full = (Path.cwd() / path_arg).resolve()
        try:
            rel = to_posix(full.relative_to(repo.work_tree))
        except ValueError:
            failed.append((path_arg, "outside the repository"))
            continue
        rel = '' if rel == '.' else rel

        if full.is_dir():
            staged.extend(index.add_all(repo, full))
            prefix = rel + '/' if rel else ''
            for tracked in list(index):
                if tracked.startswith(prefix) and not (repo.work_tree / tracked).is_file():
                    index.remove(tracked)
                    removed.append(tracked)
        elif full.is_file():
            if not force and ignore.is_ignored(rel):
                ignored.append(rel)
                continue
            if index.add_file(repo, full):
                staged.append(rel)
        elif rel in index:
            index.remove(rel)
            removed.append(rel)
        else:
            failed.append((path_arg, "did not match any files"))

    repo.save_index()

    if staged:
        click.echo(success(f"Added {len(staged)} file(s) to staging area"))
        for path in staged:
            click.echo(info(f"  {path}"))
    if removed:
        click.echo(success(f"Staged removal of {len(removed)} file(s)"))
        for path in removed:
            click.echo(info(f"  {path}"))
    if not staged and not removed and not failed and not ignored:
        click.echo(info("Nothing changed; staged content already up to date"))

    if ignored:
        click.echo(warning(f"Ignored {len(ignored)} file(s) matching .twigignore patterns"))
        for path in ignored:
            click.echo(warning(f"  {path}"))
        click.echo(info("Use 'twig add -f <file>' to force add ignored files"))

    if repo.merge.is_merge_in_progress():
        unresolved = [p for p in staged if has_conflict_markers(repo.work_tree / p)]
        if unresolved:
            click.echo(warning(f"{len(unresolved)} file(s) still contain conflict markers:"))
            for path in unresolved:
                click.echo(warning(f"  {path}"))

    if failed:
        for path, reason in failed:
            click.echo(error(f"  {path}: {reason}"))
        raise click.Abort()
