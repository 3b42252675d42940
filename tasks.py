# type: ignore
from invoke import task


@task
def venv(ctx):
    """Create the development environment with uv."""
    ctx.run("uv sync --all-extras")


@task
def lint(ctx):
    """
    Run ruff and mypy over the package sources.
    """
    ctx.run("ruff check src tests", pty=True)
    ctx.run("ruff format --check src tests", pty=True)
    ctx.run("mypy src", pty=True)


@task
def test(ctx):
    """
    Run tests with coverage information.
    """
    ctx.run("pytest --cov=httponoff --cov-report=term-missing", pty=True)


@task
def mock(ctx, name="wifi101-F714A9", port=8080):
    """Serve a mock light and announce it over mDNS."""
    ctx.run(f"httponoff mock --name {name} --port {port}", pty=True)


@task
def build_package(ctx):
    """
    Build package using uv.
    """
    ctx.run("rm -rf dist")
    ctx.run("uv build")
