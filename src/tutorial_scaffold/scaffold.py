"""Create the directory tree of a new tutorial."""

import pathlib
from dataclasses import dataclass

from . import templates
from .bootstrap import bootstrap_tests
from .console import Reporter
from .git import branch_name, create_git_branch
from .validator import TUTORIALS_DIRNAME, slug_to_title, validate_new_tutorial

TOTAL_STEPS = 4


@dataclass
class ScaffoldOptions:
    """Which optional side effects to perform."""

    create_branch: bool = True
    install: bool = True


def create_directories(tutorial_dir: pathlib.Path, slug: str) -> None:
    (tutorial_dir / "tests").mkdir(parents=True)
    (tutorial_dir / "scripts").mkdir(parents=True)
    (tutorial_dir / f"{slug}-code").mkdir(parents=True)


def create_files(tutorial_dir: pathlib.Path, slug: str) -> None:
    files = {
        "justfile": templates.generate_justfile(),
        f"tests/{templates.e2e_test_filename(slug)}": templates.generate_test(slug),
        "tutorial.yml": templates.generate_tutorial_yml(slug, slug_to_title(slug)),
        "README.md": templates.generate_readme(slug),
        "scripts/.gitkeep": "",
        ".gitignore": templates.generate_gitignore(),
    }
    for relative_path, content in files.items():
        (tutorial_dir / relative_path).write_text(content, encoding="utf-8")


def scaffold_structure(tutorial_dir: pathlib.Path, slug: str, reporter: Reporter) -> None:
    create_directories(tutorial_dir, slug)
    create_files(tutorial_dir, slug)

    prefix = f"{TUTORIALS_DIRNAME}/{slug}"
    reporter.success("Scaffolded folder structure")
    reporter.info(f"  - {prefix}/README.md")
    reporter.info(f"  - {prefix}/tutorial.yml")
    reporter.info(f"  - {prefix}/tests/{templates.e2e_test_filename(slug)}")
    reporter.info(f"  - {prefix}/{slug}-code/")


def verify_setup(tutorial_dir: pathlib.Path, reporter: Reporter) -> bool:
    """Check that the files later steps rely on are present."""
    ok = (tutorial_dir / "pyproject.toml").exists() and (
        tutorial_dir / "README.md"
    ).exists()
    if ok:
        reporter.success("All files created successfully!")
    else:
        reporter.warning(
            "Some files may be missing. Please check the tutorial directory."
        )
    return ok


def print_success_message(slug: str, reporter: Reporter) -> None:
    prefix = f"{TUTORIALS_DIRNAME}/{slug}"
    rule = "=" * 60

    reporter.log(f"\n{rule}", "green")
    reporter.log("🎉 Tutorial created successfully!", "green")
    reporter.log(f"{rule}\n", "green")

    reporter.log("📝 Next Steps:\n", "yellow")
    next_steps = [
        ("Preview your tutorial live (recommended):", [f"cookbook preview {prefix}"]),
        ("Write your tutorial content:", [f"{prefix}/README.md"]),
        ("Add your code implementation:", [f"{prefix}/{slug}-code/"]),
        ("Write comprehensive tests:", [f"{prefix}/tests/"]),
        ("Run tests to verify:", [f"cd {prefix} && uv run pytest"]),
        ("Update tutorial.yml metadata:", [f"{prefix}/tutorial.yml"]),
        (
            "When ready, open a Pull Request:",
            [
                "git add -A",
                f'git commit -m "feat(tutorial): add {slug}"',
                f"git push origin {branch_name(slug)}",
            ],
        ),
    ]
    for number, (title, commands) in enumerate(next_steps, start=1):
        reporter.log(f"  {number}. {title}", "cyan")
        for command in commands:
            reporter.log(f"     {command}")
        reporter.log("")

    reporter.log("📚 Need help? Check CONTRIBUTING.md or open an issue!\n", "blue")


def create_tutorial(
    slug: str,
    root: pathlib.Path,
    options: ScaffoldOptions,
    reporter: Reporter,
) -> pathlib.Path:
    """Create ``tutorials/<slug>`` under ``root``.

    All preconditions are checked before anything is written. Failures
    after that point raise ScaffoldError and leave whatever was already
    created in place.
    """
    reporter.log("\n🚀 Polkadot Cookbook - Tutorial Creator\n", "bold blue")

    tutorial_dir = validate_new_tutorial(root, slug)
    reporter.log(f"Creating tutorial: {slug}\n", "cyan")

    reporter.step(1, TOTAL_STEPS, "Creating git branch...")
    if options.create_branch:
        create_git_branch(slug, root, reporter)
    else:
        reporter.info("Skipped (--no-branch)")

    reporter.step(2, TOTAL_STEPS, "Scaffolding tutorial structure...")
    scaffold_structure(tutorial_dir, slug, reporter)

    reporter.step(3, TOTAL_STEPS, "Bootstrapping test environment...")
    bootstrap_tests(tutorial_dir, slug, reporter, install=options.install)

    reporter.step(4, TOTAL_STEPS, "Verifying setup...")
    verify_setup(tutorial_dir, reporter)

    print_success_message(slug, reporter)
    return tutorial_dir
