from io import StringIO

import pytest

from adder import Command
from adder.completion import ShellCompDirective, decode


def noop(cmd, args):
    return None


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "ADDER_ACTIVE_HELP",
        "ADDER_COMPLETION_DESCRIPTIONS",
        "APP_ACTIVE_HELP",
        "APP_COMPLETION_DESCRIPTIONS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def app():
    root = Command(use="app", short="Demo app")
    root.add_command(Command(use="alpha", run=noop), Command(use="beta", run=noop))
    out, err = StringIO(), StringIO()
    root.set_out(out)
    root.set_err(err)
    return root, out


@pytest.mark.asyncio
async def test_complete_root_listing(app):
    root, out = app
    await root.execute_async(["__complete", ""])
    assert out.getvalue() == (
        "alpha\n"
        "beta\n"
        "completion\tGenerate the autocompletion script for the specified shell\n"
        "help\tHelp about any command\n"
        ":4\n"
    )


@pytest.mark.asyncio
async def test_complete_without_descriptions(app):
    root, out = app
    await root.execute_async(["__complete_no_desc", ""])
    assert out.getvalue() == "alpha\nbeta\ncompletion\nhelp\n:4\n"


@pytest.mark.asyncio
async def test_complete_no_desc_camel_case_alias(app):
    root, out = app
    await root.execute_async(["__completeNoDesc", "a"])
    assert out.getvalue() == "alpha\n:4\n"


@pytest.mark.asyncio
async def test_complete_flag_value_callback(app):
    root, out = app
    deploy = Command(use="deploy", run=noop)
    deploy.flags().add_string("env", usage="Target environment")
    deploy.register_flag_completion_func(
        "env",
        lambda cmd, args, to_complete: (
            ["dev", "staging", "prod"],
            ShellCompDirective.NO_FILE_COMP | ShellCompDirective.NO_SPACE,
        ),
    )
    root.add_command(deploy)
    await root.execute_async(["__complete", "deploy", "--env", "d"])
    assert out.getvalue() == "dev\n:6\n"
    completions, directive = decode(out.getvalue())
    assert [completion.value for completion in completions] == ["dev"]
    assert directive == ShellCompDirective.NO_SPACE | ShellCompDirective.NO_FILE_COMP


@pytest.mark.asyncio
async def test_complete_extension_filter(app):
    root, out = app
    deploy = Command(use="deploy", run=noop)
    deploy.flags().add_string("file")
    deploy.mark_flag_filename("file", "yaml", "yml")
    root.add_command(deploy)
    await root.execute_async(["__complete", "deploy", "--file", ""])
    assert out.getvalue() == "yaml\nyml\n:8\n"


@pytest.mark.asyncio
async def test_complete_descriptions_disabled_by_environment(app, monkeypatch):
    root, out = app
    monkeypatch.setenv("APP_COMPLETION_DESCRIPTIONS", "false")
    await root.execute_async(["__complete", "h"])
    assert out.getvalue() == "help\n:4\n"


@pytest.mark.asyncio
async def test_complete_help_topics(app):
    root, out = app
    await root.execute_async(["__complete", "help", ""])
    completions, directive = decode(out.getvalue())
    assert [completion.value for completion in completions] == [
        "alpha",
        "beta",
        "completion",
        "help",
    ]
    assert directive == ShellCompDirective.NO_FILE_COMP


@pytest.mark.asyncio
async def test_complete_error_directive(app):
    root, out = app
    await root.execute_async(["__complete", "alpha", "--nope", ""])
    assert out.getvalue() == ":1\n"


@pytest.mark.asyncio
async def test_complete_command_is_not_left_in_tree(app):
    root, _ = app
    await root.execute_async(["alpha"])
    assert "__complete" not in [cmd.name for cmd in root.all_commands()]
    await root.execute_async(["__complete", ""])
    await root.execute_async(["__complete", ""])
    assert [cmd.name for cmd in root.all_commands()].count("__complete") == 1


@pytest.mark.asyncio
async def test_completion_bash_script(app):
    root, out = app
    await root.execute_async(["completion", "bash"])
    script = out.getvalue()
    assert script.startswith("# bash completion for app")
    assert " __complete " in script


@pytest.mark.asyncio
async def test_completion_no_descriptions_flag(app):
    root, out = app
    await root.execute_async(["completion", "zsh", "--no-descriptions"])
    assert "__complete_no_desc" in out.getvalue()


@pytest.mark.asyncio
async def test_completion_lists_shells(app):
    root, out = app
    await root.execute_async(["__complete", "completion", ""])
    completions, directive = decode(out.getvalue())
    assert [completion.value for completion in completions] == [
        "bash",
        "fish",
        "nushell",
        "powershell",
        "zsh",
    ]
    assert directive == ShellCompDirective.NO_FILE_COMP


@pytest.mark.asyncio
async def test_completion_command_can_be_disabled(app):
    root, out = app
    root.completion_options.disable_default_cmd = True
    await root.execute_async(["__complete", ""])
    assert out.getvalue() == "alpha\nbeta\nhelp\tHelp about any command\n:4\n"


@pytest.mark.asyncio
async def test_program_defined_completion_command_is_kept(app):
    root, _ = app
    custom = Command(use="completion", short="Custom completion", run=noop)
    root.add_command(custom)
    await root.execute_async(["completion"])
    assert [cmd for cmd in root.all_commands() if cmd.name == "completion"] == [custom]


@pytest.mark.asyncio
async def test_root_without_sub_commands_completes_as_leaf():
    seen = []

    def complete(cmd, args, to_complete):
        seen.append(cmd.name)
        return ["one", "two"], ShellCompDirective.NO_FILE_COMP

    root = Command(use="solo", valid_args_function=complete, run=noop)
    out = StringIO()
    root.set_out(out)
    await root.execute_async(["__complete", "o"])
    assert out.getvalue() == "one\n:4\n"
    assert seen == ["solo"]
    assert not root.has_sub_commands()
