"""
Unit tests for sassmake.ini parser.
"""

import pytest
from pathlib import Path

from sassmake.config.ini_parser import BuildConfig, BuildConfigError
from sassmake.config.options import LinkMode, PROFILING_LINK_FLAGS
from sassmake.config.plugins import PluginState


class TestBuildConfig:
    """Test suite for BuildConfig parser."""

    @pytest.fixture
    def tmp_ini_path(self, tmp_path):
        """Fixture to provide a temporary INI file path."""
        return tmp_path / "sassmake.ini"

    @pytest.fixture
    def full_config(self, tmp_ini_path):
        """Create config setting every option."""
        content = """
[sassmake]
sassc = yes
plugins = no
compiler = clang
profiling = true
link_mode = static
manifest = vendor/libsass/Makefile.conf

[plugins]
digest = enabled
glob = disabled
"""
        tmp_ini_path.write_text(content)
        return tmp_ini_path

    def test_missing_file_uses_defaults(self, tmp_ini_path):
        """Test defaults when no config file exists."""
        config = BuildConfig.load(tmp_ini_path)
        features = config.get_feature_flags()
        options = config.get_build_options()

        assert features.build_cli_tool is False
        assert features.build_plugin_set is True
        assert options.link_mode is LinkMode.SHARED
        assert options.profiling is False
        assert config.get_compiler() is None
        assert config.get_plugin_states() == {}

    def test_missing_required_file(self, tmp_ini_path):
        """Test a required config file must exist."""
        with pytest.raises(BuildConfigError, match="not found"):
            BuildConfig.load(tmp_ini_path, required=True)

    def test_full_config(self, full_config):
        """Test every setting is read."""
        config = BuildConfig.load(full_config)
        features = config.get_feature_flags()
        options = config.get_build_options()

        assert features.build_cli_tool is True
        assert features.build_plugin_set is False
        assert options.link_mode is LinkMode.STATIC
        assert options.profiling is True
        assert options.link_flags() == list(PROFILING_LINK_FLAGS)
        assert config.get_compiler() == "clang"

    def test_manifest_path(self, full_config, tmp_path):
        """Test manifest path is relative to the project."""
        config = BuildConfig.load(full_config)

        assert config.get_manifest_path(tmp_path) == tmp_path / "vendor/libsass/Makefile.conf"

    def test_default_manifest_path(self):
        """Test default manifest location."""
        config = BuildConfig()

        assert config.get_manifest_path(Path("proj")) == Path("proj/libsass/Makefile.conf")

    def test_plugin_states(self, full_config):
        """Test plugin overrides are applied in declaration order."""
        config = BuildConfig.load(full_config)
        plugins = config.get_plugins()

        assert config.get_plugin_states() == {
            "digest": PluginState.ENABLED,
            "glob": PluginState.DISABLED,
        }
        assert plugins.names() == ["glob", "math", "digest"]
        assert plugins.get("digest").buildable
        assert not plugins.get("glob").buildable

    def test_invalid_boolean(self, tmp_ini_path):
        """Test a bad boolean value is reported."""
        tmp_ini_path.write_text("[sassmake]\nsassc = perhaps\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="sassc"):
            config.get_feature_flags()

    def test_invalid_link_mode(self, tmp_ini_path):
        """Test a bad link mode is reported."""
        tmp_ini_path.write_text("[sassmake]\nlink_mode = dynamic\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="Invalid link mode"):
            config.get_build_options()

    def test_invalid_plugin_state(self, tmp_ini_path):
        """Test a bad plugin state is reported."""
        tmp_ini_path.write_text("[plugins]\nmath = sometimes\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="math"):
            config.get_plugin_states()

    def test_unknown_plugin(self, tmp_ini_path):
        """Test an override for an undeclared plugin is reported."""
        tmp_ini_path.write_text("[plugins]\ncolors = enabled\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="colors"):
            config.get_plugins()

    def test_unknown_setting(self, tmp_ini_path):
        """Test a misspelled setting is rejected."""
        tmp_ini_path.write_text("[sassmake]\nplugin = yes\n")

        with pytest.raises(BuildConfigError, match="plugin"):
            BuildConfig.load(tmp_ini_path)

    def test_parse_error(self, tmp_ini_path):
        """Test malformed INI content."""
        tmp_ini_path.write_text("sassc = yes\n")

        with pytest.raises(BuildConfigError, match="Failed to parse"):
            BuildConfig.load(tmp_ini_path)

    def test_interpolation(self, tmp_ini_path):
        """Test ${section:key} references are resolved."""
        tmp_ini_path.write_text(
            "[paths]\nroot = third_party\n\n"
            "[sassmake]\nmanifest = ${paths:root}/libsass/Makefile.conf\n"
        )
        config = BuildConfig.load(tmp_ini_path)

        assert config.get_manifest_path(Path(".")) == Path("third_party/libsass/Makefile.conf")

    def test_debug_and_link_flags(self, tmp_ini_path):
        """Test compile and link extras are read."""
        tmp_ini_path.write_text(
            "[sassmake]\ndebug = on\nprofiling = yes\nlink_flags = -Wl,--as-needed -static-libgcc\n"
        )
        options = BuildConfig.load(tmp_ini_path).get_build_options()

        assert options.debug is True
        assert options.extra_link_flags == ("-Wl,--as-needed", "-static-libgcc")
        assert options.link_flags() == ["-Wl,--as-needed", "-static-libgcc", *PROFILING_LINK_FLAGS]

    def test_bad_interpolation_in_string_setting(self, tmp_ini_path):
        """Test a shell-style $VAR reference is reported as a config error."""
        tmp_ini_path.write_text("[sassmake]\ncompiler = $CC\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="compiler"):
            config.get_compiler()

    def test_bad_interpolation_in_boolean_setting(self, tmp_ini_path):
        """Test an unresolvable reference in a boolean is a config error."""
        tmp_ini_path.write_text("[sassmake]\nsassc = ${missing:key}\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="sassc"):
            config.get_feature_flags()

    def test_bad_interpolation_in_plugin_state(self, tmp_ini_path):
        """Test a broken reference in [plugins] is a config error."""
        tmp_ini_path.write_text("[plugins]\nmath = $state\n")
        config = BuildConfig.load(tmp_ini_path)

        with pytest.raises(BuildConfigError, match="plugins"):
            config.get_plugin_states()
