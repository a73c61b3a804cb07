import pytest

from core.scan_config import ScanConfig, parse_ports


def test_defaults():
    config = ScanConfig()

    assert config.timeout == 15.0
    assert config.ports == [8091, 8092, 8093, 8094, 8095, 80, 8080]
    assert str(config.input_file) == 'domains.txt'
    assert str(config.output_file) == 'net_data.csv'


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('DIPSCAN_TIMEOUT', '0.5')
    monkeypatch.setenv('DIPSCAN_PORTS', '443, 80,443')
    monkeypatch.setenv('DIPSCAN_OUTPUT_FILE', str(tmp_path / 'out.csv'))

    config = ScanConfig()

    assert config.timeout == 0.5
    assert config.ports == [443, 80]
    assert config.to_dict()['output_file'] == str(tmp_path / 'out.csv')


def test_env_file_is_read_but_environment_wins(monkeypatch, tmp_path):
    env_file = tmp_path / '.env'
    env_file.write_text('DIPSCAN_PORTS=22,25\nDIPSCAN_TIMEOUT=3\n', encoding='utf-8')
    monkeypatch.setenv('DIPSCAN_TIMEOUT', '1')

    config = ScanConfig(str(env_file))

    assert config.ports == [22, 25]
    assert config.timeout == 1.0


@pytest.mark.parametrize('raw', ['', '80,http', '0', '70000', ' , '])
def test_invalid_ports_rejected(raw):
    with pytest.raises(ValueError):
        parse_ports(raw)


@pytest.mark.parametrize('raw', ['0', '-1', 'soon'])
def test_invalid_timeout_rejected(monkeypatch, raw):
    monkeypatch.setenv('DIPSCAN_TIMEOUT', raw)
    with pytest.raises(ValueError, match='DIPSCAN_TIMEOUT'):
        ScanConfig()
