"""Useful tasks for use when developing the jqGrid widget.

This uses the `Invoke` library."""
from pathlib import Path

from invoke import Context, Exit, task

PROJECT_DIR = Path(__file__).parent


@task
def test(c: Context, path="", verbose=False):
    """Run the test suite"""
    args = " -v" if verbose else ""
    c.run(f"pytest{args} {path}".strip(), pty=True)


@task
def demo(c: Context, port=8000):
    """Run the books demo page with the local settings"""
    if not (PROJECT_DIR / "manage.py").exists():
        raise Exit("manage.py not found, run from a source checkout", -1)
    with c.cd(PROJECT_DIR):
        c.run(f"python manage.py runserver {port}", env={"DJANGO_SETTINGS_MODULE": "config.settings.local"}, pty=True)


@task
def translations(c: Context):
    """Make Django translations"""
    c.run("python manage.py makemessages --all --ignore venv")
    c.run("python manage.py compilemessages")
