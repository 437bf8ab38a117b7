import pytest
import yaml

from maskblur.models.blur import BlurMargin
from maskblur.models.geometry import Rect
from maskblur.utils.config import (
    RunConfig, default_config, load_config, parse_margin, parse_rect, update_config
)
from maskblur.utils.errors import ConfigurationError


def _config(**search):
    cfg = default_config()
    cfg['paths'].update(input='in.png', output='out.png', masks=['m.png'])
    cfg['search'].update(search)
    return cfg


def test_defaults():
    cfg = RunConfig.from_dict(_config())
    assert cfg.threshold == 80.0
    assert cfg.blur_kernel_size == 3
    assert cfg.blur_deviation == 10
    assert cfg.roi == Rect(0, 0, 0, 0)
    assert cfg.blur_margin == BlurMargin(0, 0, 0, 0)
    assert cfg.min_similarity == 0.1
    assert cfg.dry_run is False
    assert cfg.mask_paths == ('m.png',)


def test_parse_rect_fills_missing_fields():
    assert parse_rect("0,-500") == Rect(0, -500, 0, 0)
    assert parse_rect([1, 2, 3, 4]) == Rect(1, 2, 3, 4)
    assert parse_margin("5, 6, 7, 8") == BlurMargin(5, 6, 7, 8)


@pytest.mark.parametrize("value", ["a,b", "1,2,3,4,5", "1.5"])
def test_parse_rect_rejects_garbage(value):
    with pytest.raises(ConfigurationError):
        parse_rect(value)


@pytest.mark.parametrize("search", [
    {'min_similarity': 1.5},
    {'min_similarity': -0.1},
    {'threshold': 300},
    {'threshold': 'high'},
    {'timeout': 0},
])
def test_out_of_range_options(search):
    with pytest.raises(ConfigurationError):
        RunConfig.from_dict(_config(**search))


def test_even_kernel_and_negative_margin_rejected():
    cfg = _config()
    cfg['blur']['kernel_size'] = 4
    with pytest.raises(ConfigurationError):
        RunConfig.from_dict(cfg)

    cfg = _config()
    cfg['blur']['margin'] = "0,-1,0,0"
    with pytest.raises(ConfigurationError):
        RunConfig.from_dict(cfg)


def test_missing_masks_rejected():
    cfg = _config()
    cfg['paths']['masks'] = []
    with pytest.raises(ConfigurationError):
        RunConfig.from_dict(cfg)


def test_load_config_and_overrides(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({
        'paths': {'input': 'a.png', 'output': 'b.png', 'masks': ['c.png']},
        'search': {'roi': '0,-100', 'threshold': 60},
    }))

    cfg = load_config(str(path))
    assert cfg['blur']['kernel_size'] == 3

    cfg = update_config(cfg, {'search': {'threshold': None, 'min_similarity': 0.5}})
    run = RunConfig.from_dict(cfg)
    assert run.threshold == 60.0
    assert run.min_similarity == 0.5
    assert run.roi == Rect(0, -100, 0, 0)


def test_load_config_errors(tmp_path):
    with pytest.raises(ConfigurationError):
        load_config(str(tmp_path / "missing.yaml"))

    bad = tmp_path / "bad.yaml"
    bad.write_text("paths: [unclosed")
    with pytest.raises(ConfigurationError):
        load_config(str(bad))


def test_non_integral_float_rejected_for_integer_options():
    cfg = _config()
    cfg['blur']['deviation'] = 10.7
    with pytest.raises(ConfigurationError):
        RunConfig.from_dict(cfg)

    cfg = _config()
    cfg['blur']['deviation'] = 12.0
    assert RunConfig.from_dict(cfg).blur_deviation == 12
