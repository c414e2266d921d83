import pytest

from boresizer.config import PackingConfig, get_packing_config, set_packing_config


@pytest.fixture
def packing_config():
    """Install a process-wide config for one test and restore it afterwards."""

    saved = get_packing_config()

    def install(**overrides):
        config = PackingConfig(**overrides)
        set_packing_config(config)
        return config

    yield install
    set_packing_config(saved)


@pytest.fixture
def coarse_config():
    return PackingConfig(max_iterations=10, radius_step_size=1.0, angle_step_size=90.0)
