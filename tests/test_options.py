"""Tests for command line option parsing."""

import pytest

from onload_image.lib.errors import ConflictingTagSpecError, PushPreconditionError, UsageError
from onload_image.lib.options import Action, BuildOptions, parse_options, parse_truthy


class TestActions:
    """Test action selection."""

    @pytest.mark.parametrize("flag,action", [
        ("--versions", Action.VERSIONS),
        ("--flavors", Action.FLAVORS),
        ("--gettag", Action.GETTAG),
        ("--build", Action.BUILD),
        ("--execute", Action.BUILD),
        ("-x", Action.BUILD),
        ("--help", Action.HELP),
        ("-h", Action.HELP),
    ])
    def test_single_action(self, flag, action):
        """Each action flag selects its action."""
        assert parse_options([flag]).action == action

    def test_no_action(self):
        """Without an action flag the action is unset."""
        assert parse_options([]).action is None

    def test_last_action_wins(self):
        """Several action flags are not an error; the last one is used."""
        assert parse_options(["--versions", "--build"]).action == Action.BUILD
        assert parse_options(["--build", "--versions"]).action == Action.VERSIONS
        assert parse_options(["-x", "--flavors"]).action == Action.FLAVORS

    def test_execute_sets_flag(self):
        """--execute requests execution even if another action follows."""
        options = parse_options(["-x", "--versions"])
        assert options.execute is True
        assert parse_options(["--build"]).execute is False


class TestSetOnce:
    """Test flags that may only be given once."""

    def test_onload_twice(self):
        """A second --onload is rejected, not silently used."""
        with pytest.raises(UsageError, match="--onload"):
            parse_options(["--onload", "8.0.2.51", "-o", "7.1.3.202"])

    def test_flavor_twice(self):
        """A second --flavor is rejected."""
        with pytest.raises(UsageError, match="--flavor"):
            parse_options(["-f", "bionic", "--flavor", "jammy"])

    def test_once_is_fine(self):
        options = parse_options(["-o", "7.1.3.202", "-f", "jammy"])
        assert options.version == "7.1.3.202"
        assert options.flavor == "jammy"


class TestAutotag:
    """Test the tri-state autotag prefix."""

    def test_unset(self):
        assert parse_options(["--build"]).autotag is None

    def test_present_without_value(self):
        assert parse_options(["--autotag"]).autotag == ""
        assert parse_options(["-a", "--build"]).autotag == ""

    def test_present_with_value(self):
        assert parse_options(["-a", "rel:"]).autotag == "rel:"

    def test_gettag_seeds_prefix(self):
        """--gettag sets the prefix only when no autotag is set yet."""
        assert parse_options(["--gettag"]).autotag == ""
        assert parse_options(["--gettag", "img:"]).autotag == "img:"
        assert parse_options(["-a", "first:", "--gettag", "second:"]).autotag == "first:"

    def test_autotag_overwrites(self):
        """A later --autotag replaces an earlier prefix."""
        assert parse_options(["--gettag", "first:", "-a", "second:"]).autotag == "second:"


class TestZf:
    """Test the optional truthy value of --zf."""

    @pytest.mark.parametrize("argv,expected", [
        ([], False),
        (["--zf"], True),
        (["--zf", "1"], True),
        (["--zf", "yes"], True),
        (["--zf", "0"], False),
        (["--zf", "false"], False),
        (["--zf", "FALSE"], False),
        (["--zf", "False"], False),
    ])
    def test_zf(self, argv, expected):
        assert parse_options(argv).zf is expected

    def test_parse_truthy(self):
        assert parse_truthy(None) is True
        assert parse_truthy("") is True
        assert parse_truthy("fAlSe") is False


class TestOtherFlags:
    """Test the remaining option flags."""

    def test_defaults(self):
        """Nothing on the command line gives the model defaults."""
        assert parse_options([]) == BuildOptions()

    def test_build_args_keep_order(self):
        options = parse_options(["--arg", "B=2", "--arg", "A=1", "--arg", "B=3"])
        assert options.build_args == ("B=2", "A=1", "B=3")

    def test_switches(self):
        options = parse_options(["-q", "--no-cache", "-u", "http://x/y.zip", "-t", "img:1"])
        assert options.quiet is True
        assert options.use_cache is False
        assert options.url == "http://x/y.zip"
        assert options.tag == "img:1"

    def test_verbosity_counts(self):
        assert parse_options(["-v"]).verbosity == 1
        assert parse_options(["-v", "--verbose", "-v"]).verbosity == 3
        assert parse_options(["-vv"]).verbosity == 2

    def test_catalog_path(self, tmp_path):
        path = tmp_path / "catalog.yaml"
        assert parse_options(["--catalog", str(path)]).catalog_path == path


class TestUsageErrors:
    """Test malformed command lines."""

    @pytest.mark.parametrize("argv", [
        ["--bogus"],
        ["--ver"],
        ["stray"],
        ["--tag"],
        ["--onload"],
        ["--arg"],
    ])
    def test_rejected(self, argv):
        with pytest.raises(UsageError):
            parse_options(argv)


class TestCrossChecks:
    """Test checks across several flags."""

    def test_tag_and_autotag(self):
        with pytest.raises(ConflictingTagSpecError):
            parse_options(["--build", "-t", "img:1", "-a", "rel:"])

    def test_tag_and_autotag_any_action(self):
        """The conflict is reported whatever the action."""
        with pytest.raises(ConflictingTagSpecError):
            parse_options(["--versions", "-t", "img:1", "--autotag"])
        with pytest.raises(ConflictingTagSpecError):
            parse_options(["-t", "img:1", "--gettag"])

    def test_push_without_execute(self):
        with pytest.raises(PushPreconditionError, match="--execute"):
            parse_options(["--build", "-f", "bionic", "-t", "img:1", "--push"])

    def test_push_with_execute(self):
        options = parse_options(["-x", "-p", "-f", "bionic", "-t", "img:1"])
        assert options.push is True
        assert options.execute is True
