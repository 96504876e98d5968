import pytest

from py_puttcalc import basicConfig, loadImperialUnits, loadMetricUnits, PreferredUnits, Unit


class TestConfigLoader:

    @pytest.mark.parametrize(
        "test_name, config_func, expected_distance, expected_velocity",
        [
            ("manual", lambda: basicConfig(preferred_units={'distance': Unit.Foot}), Unit.Foot, None),
            ("imperial", loadImperialUnits, Unit.Foot, Unit.FPS),
            ("metric", loadMetricUnits, Unit.Meter, Unit.MPS),
        ],
    )
    def test_preferred_units_load(self, test_name, config_func, expected_distance, expected_velocity):
        PreferredUnits.restore_defaults()

        config_func()

        if expected_distance:
            assert PreferredUnits.distance == expected_distance
        if expected_velocity:
            assert PreferredUnits.velocity == expected_velocity
        PreferredUnits.restore_defaults()

    def test_imperial_keeps_stimp_in_feet(self):
        loadImperialUnits()
        assert PreferredUnits.stimp == Unit.Foot

    def test_load_from_file(self, tmp_path):
        config = tmp_path / '.pypc.toml'
        config.write_text('[pypc.preferred_units]\ndistance = "yard"\nangular = "radian"\n')
        basicConfig(str(config))
        assert PreferredUnits.distance == Unit.Yard
        assert PreferredUnits.angular == Unit.Radian

    def test_file_without_section(self, tmp_path):
        config = tmp_path / 'pypc.toml'
        config.write_text('[other]\nkey = 1\n')
        basicConfig(str(config))
        assert PreferredUnits.distance == Unit.Meter

    def test_search_from_cwd(self, tmp_path, monkeypatch):
        (tmp_path / 'pypc.toml').write_text('[pypc.preferred_units]\nvelocity = "fps"\n')
        nested = tmp_path / 'a' / 'b'
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        basicConfig()
        assert PreferredUnits.velocity == Unit.FPS

    def test_file_and_mapping_rejected(self, tmp_path):
        with pytest.raises(ValueError):
            basicConfig(str(tmp_path / 'pypc.toml'), preferred_units={'distance': Unit.Meter})
