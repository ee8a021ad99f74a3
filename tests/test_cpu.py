import pytest

from hostprobe.services.cpu_monitor import CPUMetricsCollector, load_percent


@pytest.mark.parametrize(
    "load, cores, expected",
    [
        (0.0, 4, 0),
        (0.5, 4, 12),
        (1.5, 4, 37),
        (4.0, 4, 100),
        (12.0, 4, 100),
        (0.99, 1, 99),
        (1e307, 1, 100),
    ],
)
def test_load_percent_truncates_and_clamps(load, cores, expected):
    assert load_percent(load, cores) == expected


def test_collect_reports_load_and_temperature(fake_sources):
    sources = fake_sources(
        loadavg="0.50 1.00 1.50 1/123 4567\n",
        cores=4,
        sensors="k10temp-pci-00c3\nTctl:         +45.3°C\n",
    )

    cpu = CPUMetricsCollector(sources).collect()

    assert cpu.load_available is True
    assert cpu.load1_pct == 12
    assert cpu.load5_pct == 25
    assert cpu.load15_pct == 37
    assert cpu.temp_available is True
    assert cpu.temperature_c == 45


def test_missing_sensors_does_not_hide_load(fake_sources):
    cpu = CPUMetricsCollector(fake_sources(sensors=None)).collect()

    assert cpu.load_available is True
    assert cpu.load1_pct == 12
    assert cpu.temp_available is False
    assert cpu.temperature_c == 0


def test_unmatched_sensors_output_marks_temperature_unavailable(fake_sources):
    cpu = CPUMetricsCollector(fake_sources(sensors="fan1: 1200 RPM\n")).collect()

    assert cpu.temp_available is False
    assert cpu.temperature_c == 0


def test_unreadable_loadavg_zeroes_load_fields(fake_sources):
    sources = fake_sources(loadavg=None, sensors="CPU: +50.0°C\n")

    cpu = CPUMetricsCollector(sources).collect()

    assert cpu.load_available is False
    assert (cpu.load1_pct, cpu.load5_pct, cpu.load15_pct) == (0, 0, 0)
    assert cpu.temp_available is True
    assert cpu.temperature_c == 50


def test_garbled_loadavg_zeroes_load_fields(fake_sources):
    cpu = CPUMetricsCollector(fake_sources(loadavg="0.50\n")).collect()

    assert cpu.load_available is False
    assert cpu.load1_pct == 0


def test_unknown_core_count_zeroes_load_fields(fake_sources):
    cpu = CPUMetricsCollector(fake_sources(cores=None)).collect()

    assert cpu.load_available is False
    assert cpu.load15_pct == 0


def test_huge_load_is_clamped_instead_of_overflowing(fake_sources):
    cpu = CPUMetricsCollector(fake_sources(loadavg="1e307 0.0 0.0 1/1 1\n", cores=1)).collect()

    assert cpu.load_available is True
    assert (cpu.load1_pct, cpu.load5_pct, cpu.load15_pct) == (100, 0, 0)
