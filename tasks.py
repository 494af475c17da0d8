# type: ignore
import os

from invoke import task


@task
def venv(ctx):
    """Create .venv with the package and its test and dev extras."""
    ctx.run("uv sync --all-extras")


@task
def lint(ctx):
    """
    Static checks: ruff lint and formatting, then mypy.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=btwizard --cov-report=term-missing", pty=True)


@task(help={"pair": "Address to pair with", "failures": "Rejected scan starts"})
def demo(ctx, pair=None, failures=0):
    """Walk through the pairing step against the simulated radio."""
    cmd = f"btwizard simulate --start-failures {failures}"
    if pair:
        cmd += f" --pair {pair}"
    ctx.run(cmd, pty=True)


@task
def build_package(ctx):
    """
    Build sdist and wheel into dist/.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")


@task
def release(ctx):
    """Build the package and publish it to PyPI."""
    token = os.getenv("PYPI_TOKEN")
    if not token:
        raise ValueError("PYPI_TOKEN environment variable is not set")

    ctx.run("invoke build-package")
    ctx.run(f"uv publish --token {token}")
