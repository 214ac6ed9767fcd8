import pytest

from adder import Command, exact_args, match_all, only_valid_args
from adder.completion import (
    ShellCompDirective,
    append_active_help,
    encode,
    get_completions,
)
from adder.completion.directive import ACTIVE_HELP_MARKER


def noop(cmd, args):
    return None


def env_completions(cmd, args, to_complete):
    return ["dev", "staging", "prod"], ShellCompDirective.NO_FILE_COMP | ShellCompDirective.NO_SPACE


@pytest.fixture
def root():
    root = Command(use="app", short="Demo app")
    root.persistent_flags().add_bool("debug", "d", usage="Enable debug output")
    deploy = Command(use="deploy", short="Deploy the app", run=noop)
    deploy.flags().add_string("env", "e", usage="Target environment")
    deploy.flags().add_string("file", usage="Manifest file")
    deploy.flags().add_bool("dry-run", usage="Print only")
    deploy.flags().add_string_slice("tag", usage="Tags to apply")
    deploy.register_flag_completion_func("env", env_completions)
    get = Command(
        use="get",
        short="Get resources",
        valid_args=["pods\tPod resources", "services"],
        arg_aliases=["po"],
        run=noop,
    )
    root.add_command(
        deploy,
        get,
        Command(use="delete", short="Delete things", run=noop),
        Command(use="remove", short="Remove things", aliases=["rm"], run=noop),
        Command(use="secret", hidden=True, run=noop),
    )
    return root


def values(result):
    return [completion.value for completion in result.completions]


def test_lists_available_sub_commands(root):
    result = get_completions(root, [""])
    assert values(result) == ["delete", "deploy", "get", "remove"]
    assert result.directive == ShellCompDirective.NO_FILE_COMP
    assert result.command is root


def test_sub_commands_filtered_by_prefix(root):
    result = get_completions(root, ["de"])
    assert values(result) == ["delete", "deploy"]
    assert result.completions[1].description == "Deploy the app"


def test_alias_offered_when_name_does_not_match(root):
    result = get_completions(root, ["rm"])
    assert values(result) == ["rm"]
    assert result.completions[0].description == "Remove things"


def test_flag_value_from_callback(root):
    result = get_completions(root, ["deploy", "--env", "d"])
    assert values(result) == ["dev"]
    assert result.directive == 6


@pytest.mark.parametrize("typed", ["--env=s", "-e=s"])
def test_flag_value_with_equals(root, typed):
    result = get_completions(root, ["deploy", typed])
    assert values(result) == ["staging"]


def test_shorthand_flag_value(root):
    result = get_completions(root, ["deploy", "-e", ""])
    assert values(result) == ["dev", "staging", "prod"]


def test_extension_filter(root):
    root.find_next("deploy").mark_flag_filename("file", "yaml", "yml")
    result = get_completions(root, ["deploy", "--file", ""])
    assert values(result) == ["yaml", "yml"]
    assert result.directive == ShellCompDirective.FILTER_FILE_EXT
    assert result.directive == 8


def test_directory_filter(root):
    deploy = root.find_next("deploy")
    deploy.flags().add_string("output-dir")
    deploy.flags().add_string("cache-dir")
    deploy.mark_flag_dirname("output-dir", "build")
    deploy.mark_flag_dirname("cache-dir")
    result = get_completions(root, ["deploy", "--output-dir", ""])
    assert values(result) == ["build"]
    assert result.directive == ShellCompDirective.FILTER_DIRS
    assert values(get_completions(root, ["deploy", "--cache-dir", ""])) == []


def test_flag_names_inherited_first(root):
    result = get_completions(root, ["deploy", "--"])
    assert values(result) == ["--debug", "--dry-run", "--env", "--file", "--help", "--tag"]
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_flag_names_include_shorthands(root):
    result = get_completions(root, ["deploy", "-"])
    assert values(result) == [
        "--debug",
        "-d",
        "--dry-run",
        "--env",
        "-e",
        "--file",
        "--help",
        "-h",
        "--tag",
    ]


def test_set_flags_are_not_offered_again_unless_repeatable(root):
    result = get_completions(root, ["deploy", "--env", "dev", "--tag", "a", "--"])
    assert "--env" not in values(result)
    assert "--tag" in values(result)


def test_required_flags_come_first(root):
    root.find_next("deploy").mark_flag_required("env")
    assert values(get_completions(root, ["deploy", "--"])) == ["--env"]
    assert values(get_completions(root, ["deploy", "--env", "dev", "--d"])) == [
        "--debug",
        "--dry-run",
    ]


def test_required_flags_listed_with_positionals(root):
    root.find_next("deploy").mark_flag_required("env")
    result = get_completions(root, ["deploy", ""])
    assert values(result) == ["--env", "-e"]


def test_one_required_group_promotes_members(root):
    root.find_next("deploy").mark_flags_one_required("dry-run", "file")
    assert values(get_completions(root, ["deploy", "--"])) == ["--dry-run", "--file"]


def test_mutually_exclusive_members_are_hidden(root):
    root.find_next("deploy").mark_flags_mutually_exclusive("dry-run", "file")
    result = get_completions(root, ["deploy", "--dry-run", "--"])
    assert "--dry-run" not in values(result)
    assert "--file" not in values(result)
    assert "--env" in values(result)


def test_unknown_flag_is_an_error(root):
    result = get_completions(root, ["deploy", "--nope", ""])
    assert result.directive == ShellCompDirective.ERROR
    assert result.completions == []
    assert result.command is None


def test_help_flag_stops_completion(root):
    result = get_completions(root, ["deploy", "--help", ""])
    assert result.completions == []
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_double_dash_disables_flag_names(root):
    result = get_completions(root, ["deploy", "--", "-"])
    assert result.completions == []
    assert result.directive == ShellCompDirective.DEFAULT


def test_valid_args(root):
    result = get_completions(root, ["get", "p"])
    assert values(result) == ["pods"]
    assert result.completions[0].description == "Pod resources"
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_valid_args_only_complete_the_first_positional(root):
    assert values(get_completions(root, ["get", "po"])) == ["pods"]
    assert values(get_completions(root, ["get", "p", ""])) == []


def test_arg_aliases_only_when_nothing_else_matches(root):
    get = root.find_next("get")
    get.valid_args = ["services"]
    assert values(get_completions(root, ["get", "p"])) == ["po"]


def test_valid_args_stop_once_positionals_are_full(root):
    get = root.find_next("get")
    get.args = exact_args(1)
    assert values(get_completions(root, ["get", ""])) == ["pods", "services"]
    result = get_completions(root, ["get", "pods", ""])
    assert result.completions == []
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_value_check_before_count_check_still_stops_suggestions(root):
    def resources(cmd, args, to_complete):
        return ["deployments", "nodes"], ShellCompDirective.NO_FILE_COMP

    get = root.find_next("get")
    get.args = match_all(only_valid_args, exact_args(1))
    assert values(get_completions(root, ["get", ""])) == ["pods", "services"]
    assert values(get_completions(root, ["get", "pods", ""])) == []

    describe = Command(
        use="describe",
        valid_args_function=resources,
        args=match_all(only_valid_args, exact_args(1)),
        run=noop,
    )
    root.add_command(describe)
    assert values(get_completions(root, ["describe", ""])) == ["deployments", "nodes"]


@pytest.mark.parametrize(
    "argv",
    [
        ["deploy", "--tag", "x", "-"],
        ["deploy", "--env", ""],
        ["get", ""],
        [""],
    ],
)
def test_encoded_output_is_identical_across_requests(root, argv):
    first = get_completions(root, argv)
    second = get_completions(root, argv)
    assert encode(first.completions, first.directive) == encode(
        second.completions, second.directive
    )


def test_encoded_flag_values():
    app = Command(use="app")
    deploy = Command(use="deploy", run=noop)
    deploy.flags().add_string("env")
    deploy.register_flag_completion_func("env", env_completions)
    app.add_command(deploy)
    result = get_completions(app, ["deploy", "--env", ""])
    assert encode(result.completions, result.directive) == "dev\nstaging\nprod\n:6\n"


def test_callback_results_are_filtered_and_deduplicated(root):
    def pick(cmd, args, to_complete):
        items = append_active_help(["zeta", "alpha", "alpha", "beta"], "Pick one")
        return items, ShellCompDirective.NO_FILE_COMP | ShellCompDirective.KEEP_ORDER

    root.add_command(Command(use="pick", valid_args_function=pick, run=noop))
    result = get_completions(root, ["pick", ""])
    assert values(result) == ["zeta", "alpha", "beta", ACTIVE_HELP_MARKER + "Pick one"]
    assert result.directive == ShellCompDirective.NO_FILE_COMP | ShellCompDirective.KEEP_ORDER
    filtered = get_completions(root, ["pick", "a"])
    assert values(filtered) == ["alpha", ACTIVE_HELP_MARKER + "Pick one"]


def test_callback_receives_positionals(root):
    seen = []

    def complete(cmd, args, to_complete):
        seen.append((cmd.name, list(args), to_complete))
        return [], ShellCompDirective.DEFAULT

    root.add_command(Command(use="copy", valid_args_function=complete, run=noop))
    get_completions(root, ["copy", "--debug", "src", "ds"])
    assert seen == [("copy", ["src"], "ds")]


def test_callback_combined_with_sub_commands(root):
    def remotes(cmd, args, to_complete):
        return ["origin"], ShellCompDirective.DEFAULT

    remote = Command(use="remote", valid_args_function=remotes, run=noop)
    remote.add_command(Command(use="add", run=noop))
    root.add_command(remote)
    result = get_completions(root, ["remote", ""])
    assert values(result) == ["add", "origin"]
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_default_directive_is_inherited(root):
    root.completion_options.default_directive = ShellCompDirective.NO_FILE_COMP
    result = get_completions(root, ["delete", ""])
    assert result.completions == []
    assert result.directive == ShellCompDirective.NO_FILE_COMP


def test_without_callback_directive_is_default(root):
    result = get_completions(root, ["delete", ""])
    assert result.directive == ShellCompDirective.DEFAULT


def test_flag_parsing_disabled_sends_words_to_callback(root):
    seen = []

    def complete(cmd, args, to_complete):
        seen.append((list(args), to_complete))
        return ["--raw"], ShellCompDirective.NO_FILE_COMP

    root.add_command(
        Command(use="exec", disable_flag_parsing=True, valid_args_function=complete, run=noop)
    )
    result = get_completions(root, ["exec", "--x", "-"])
    assert seen == [(["--x"], "-")]
    assert values(result) == ["--debug", "-d", "--raw"]


def test_flags_reset_between_requests(root):
    get_completions(root, ["deploy", "--env", "dev", ""])
    result = get_completions(root, ["deploy", "--"])
    assert "--env" in values(result)


def test_required_flag_disappears_once_set(root):
    root.find_next("deploy").mark_flag_required("env")
    assert "--env" not in values(get_completions(root, ["deploy", "--env", "dev", ""]))


def test_required_together_surfaces_missing_members(root):
    root.find_next("deploy").mark_flags_required_together("env", "file")
    assert values(get_completions(root, ["deploy", ""])) == []
    assert values(get_completions(root, ["deploy", "--env", "dev", ""])) == ["--file"]
    assert values(get_completions(root, ["deploy", "--env", "dev", "--file", "x", ""])) == []
