"""Nox sessions for htmlsmith."""

import nox


PYPROJECT = nox.project.load_toml("pyproject.toml")
PYTHON_VERSIONS = nox.project.python_versions(PYPROJECT, max_version="3.14")
nox.options.default_venv_backend = "uv"
nox.options.sessions = ["tests", "cli"]


@nox.session(python=PYTHON_VERSIONS)
def tests(session: nox.Session) -> None:
    """Run the test suite on every supported interpreter."""
    session.install(".[test]")
    session.run("pytest", *session.posargs)


@nox.session(python=PYTHON_VERSIONS[-1])
def coverage(session: nox.Session) -> None:
    """Report line coverage of the htmlsmith package."""
    session.install(".[test]")
    session.run(
        "pytest",
        "--cov=htmlsmith",
        "--cov-report=term-missing",
        *session.posargs,
    )


@nox.session(python=PYTHON_VERSIONS[-1])
def cli(session: nox.Session) -> None:
    """Smoke-test the installed console script against the test templates."""
    session.install(".")
    session.run("htmlsmith", "--help", silent=True)
    session.run("htmlsmith", "templates", "-t", "tests/templates")
    session.run("htmlsmith", "render", "tests/data/008-sections.md", "-t", "tests/templates")
