"""Test untuk modul-modul di services/.

File ini menguji:
- logging_service.py: setup logger, statistik analisis
- storage.py: read/write JSON files, riwayat wilayah
- reporting.py: generate TXT/PDF reports

Jalankan dengan: python airbersih/tests/test_services.py
"""

import sys
import os
import logging
import tempfile
import shutil
from pathlib import Path
from datetime import date

import pandas as pd

# Tambahkan root repo ke Python path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

from airbersih.services.logging_service import setup_logger, LoggingService
from airbersih.services.storage import JsonStorage, AreaSafetyHistory, HISTORY_COLUMNS
from airbersih.services.reporting import ReportingService
from airbersih.core.sensory import classify_sensory


def _close_loggers(names):
    for logger_name in names:
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)


class TestLoggingService:
    """Test suite untuk logging_service."""

    def setup_method(self):
        """Setup temporary log directory."""
        self.temp_dir = tempfile.mkdtemp()
        self.log_file = os.path.join(self.temp_dir, "logs", "test.log")
        self.loggers = []

    def teardown_method(self):
        """Cleanup temporary files."""
        _close_loggers(self.loggers)
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _name(self, prefix):
        logger_name = f"{prefix}_{os.getpid()}_{id(self)}"
        self.loggers.append(logger_name)
        return logger_name

    def test_logger_creation(self):
        """Test pembuatan logger dan folder log."""
        logger_name = self._name('TestLogger')
        logger = setup_logger(name=logger_name, log_file=self.log_file)

        assert logger.name == logger_name
        assert os.path.isdir(os.path.dirname(self.log_file))

        print(f"✓ Logger created: {logger.name}")

    def test_logger_writes_to_file(self):
        logger_name = self._name('TestLoggerWrite')
        logger = setup_logger(name=logger_name, log_file=self.log_file)

        logger.info("Test log message")
        for handler in logger.handlers:
            handler.flush()

        with open(self.log_file, 'r', encoding='utf-8') as f:
            assert "Test log message" in f.read()

        print(f"✓ Logger writes to file")

    def test_no_duplicate_handlers(self):
        """Memanggil setup_logger dua kali tidak menambah handler."""
        logger_name = self._name('TestLoggerDup')
        setup_logger(name=logger_name, log_file=self.log_file)
        logger = setup_logger(name=logger_name, log_file=self.log_file)

        assert len(logger.handlers) == 1

        print(f"✓ No duplicate handlers")

    def test_analysis_statistics(self):
        service = LoggingService(self._name('TestStats'), self.log_file)

        service.log_analysis("sensory", classify_sensory('putrid', 'normal', 'clear'))
        service.log_analysis("sensory", classify_sensory('normal', 'normal', 'clear'))
        service.log_analysis("lab", classify_sensory('putrid', 'bitter', 'brown'), {"kecamatan": "Coblong"})

        stats = service.get_statistics()

        assert stats["total_analyses"] == 3
        assert stats["by_kind"] == {"sensory": 2, "lab": 1}
        assert stats["by_level"] == {"safe": 1, "caution": 1, "unsafe": 0, "hazardous": 1}
        assert stats["top_contaminants"][0] == {"contaminant": "organic contaminant", "count": 2}
        assert stats["log_file_exists"]

        print(f"✓ Statistics: {stats['by_level']}")

    def test_clear_statistics(self):
        service = LoggingService(self._name('TestClear'), self.log_file)
        service.log_analysis("sensory", classify_sensory('fishy', 'normal', 'clear'))

        service.clear_statistics()

        assert service.get_statistics()["total_analyses"] == 0
        assert service.get_most_common_contaminants() == []

        print(f"✓ Statistics cleared")


class TestStorageService:
    """Test suite untuk storage service."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.history_file = os.path.join(self.temp_dir, "history", "area_safety.json")

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_json_write_and_read(self):
        storage = JsonStorage()
        path = os.path.join(self.temp_dir, "nested", "data.json")

        assert storage.write(path, {"kecamatan": "Coblong", "score": 70})
        assert storage.read(path) == {"kecamatan": "Coblong", "score": 70}

        print(f"✓ JSON write/read")

    def test_json_missing_and_invalid(self):
        storage = JsonStorage()
        invalid = os.path.join(self.temp_dir, "invalid.json")
        with open(invalid, 'w', encoding='utf-8') as f:
            f.write("{not json")

        assert storage.read(os.path.join(self.temp_dir, "missing.json")) is None
        assert storage.read(invalid) is None
        assert storage.write(os.path.join(self.temp_dir, "bad.json"), {"x": object()}) is False

        print(f"✓ JSON errors handled")

    def test_record_and_latest(self):
        history = AreaSafetyHistory(self.history_file)
        history.record("Coblong", classify_sensory('normal', 'normal', 'clear'), test_date=date(2026, 10, 1))
        entry = history.record(
            "Coblong", classify_sensory('putrid', 'normal', 'clear'),
            kelurahan="Dago", puskesmas_id="PKM01", test_date=date(2026, 10, 15),
        )

        assert entry["safety_level"] == "caution"
        assert entry["main_contaminant"] == "organic contaminant"
        assert entry["total_contaminants"] == 2
        assert history.latest_for(" coblong ")["id"] == entry["id"]
        assert history.latest_for("Sukajadi") is None

        print(f"✓ Area history latest: {entry['safety_level']}")

    def test_history_window(self):
        history = AreaSafetyHistory(self.history_file)
        verdict = classify_sensory('fishy', 'normal', 'clear')
        history.record("Coblong", verdict, test_date=date(2026, 10, 10))
        history.record("Coblong", verdict, test_date=date(2026, 8, 1))
        history.record("Sukajadi", verdict, test_date=date(2026, 10, 12))

        recent = history.history_for("Coblong", days=30, today=date(2026, 10, 19))

        assert [r["test_date"] for r in recent] == ["2026-10-10"]

        print(f"✓ History window: {len(recent)} record")

    def test_dataframe_and_distribution(self):
        history = AreaSafetyHistory(self.history_file)
        history.record("Coblong", classify_sensory('putrid', 'normal', 'clear'))
        history.record("Coblong", classify_sensory('fishy', 'normal', 'clear'))
        history.record("Cidadap", classify_sensory('other', 'bitter', 'turbid'))

        df = history.to_dataframe()

        assert list(df.columns) == HISTORY_COLUMNS
        assert len(df) == 3
        assert history.level_distribution() == {"safe": 0, "caution": 2, "unsafe": 0, "hazardous": 1}

        empty = AreaSafetyHistory(os.path.join(self.temp_dir, "none.json"))
        assert len(empty.to_dataframe()) == 0
        assert empty.level_distribution() == {"safe": 0, "caution": 0, "unsafe": 0, "hazardous": 0}

        print(f"✓ DataFrame & distribution")

    def test_export_to_csv(self):
        history = AreaSafetyHistory(self.history_file)
        history.record("Coblong", classify_sensory('putrid', 'normal', 'clear'), test_date=date(2026, 10, 15))

        csv_path = history.export_to_csv(os.path.join(self.temp_dir, "export.csv"))
        df = pd.read_csv(csv_path)

        assert len(df) == 1
        assert df.loc[0, "kecamatan"] == "Coblong"
        assert df.loc[0, "test_date"] == "2026-10-15"

        print(f"✓ CSV exported: {csv_path}")


class TestReportingService:
    """Test suite untuk reporting service."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.output_dir = os.path.join(self.temp_dir, "reports")
        self.verdict = classify_sensory('putrid', 'heavy_metal', 'brown')

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_reporting_service_creation(self):
        service = ReportingService(output_dir=self.output_dir)

        assert os.path.isdir(self.output_dir)

        print(f"✓ ReportingService created: {service.output_dir}")

    def test_generate_txt_report(self):
        service = ReportingService(output_dir=self.output_dir)

        filepath = service.generate_txt_report(self.verdict, today=date(2026, 10, 19))

        assert filepath.endswith(".txt")
        with open(filepath, 'r', encoding='utf-8') as f:
            content = f.read()
        assert "# WATER SAFETY REPORT" in content
        assert "### Analysis Date: 19/10/2026" in content
        assert "stop consumption immediately" in content

        print(f"✓ TXT report generated: {os.path.basename(filepath)}")

    def test_generate_pdf_report(self):
        service = ReportingService(output_dir=self.output_dir)

        filepath = service.generate_pdf_report(
            self.verdict, location="Kec. Coblong", diseases=["Cholera"], today=date(2026, 10, 19)
        )

        assert filepath.endswith(".pdf")
        assert os.path.getsize(filepath) > 0
        with open(filepath, 'rb') as f:
            assert f.read(4) == b"%PDF"

        print(f"✓ PDF report generated: {os.path.basename(filepath)}")

    def test_unique_filenames(self):
        service = ReportingService(output_dir=self.output_dir)

        first = service.generate_txt_report(self.verdict)
        second = service.generate_txt_report(self.verdict)

        assert first != second

        print(f"✓ Unique report filenames")


def run_all_tests():
    """Run all service tests."""
    print("\n" + "=" * 60)
    print("Testing Services")
    print("=" * 60)

    test_classes = [TestLoggingService, TestStorageService, TestReportingService]
    total_tests = 0
    passed_tests = 0
    failed_tests = []

    for test_class in test_classes:
        print(f"\n--- {test_class.__name__} ---")
        instance = test_class()

        test_methods = [m for m in dir(instance) if m.startswith('test_')]

        for method_name in test_methods:
            total_tests += 1
            try:
                if hasattr(instance, 'setup_method'):
                    instance.setup_method()

                getattr(instance, method_name)()
                passed_tests += 1

            except AssertionError as e:
                failed_tests.append((test_class.__name__, method_name, str(e)))
                print(f"✗ {method_name} FAILED: {e}")
            except Exception as e:
                failed_tests.append((test_class.__name__, method_name, str(e)))
                print(f"✗ {method_name} ERROR: {e}")
            finally:
                if hasattr(instance, 'teardown_method'):
                    instance.teardown_method()

    print("\n" + "=" * 60)
    print("Test Summary")
    print("=" * 60)
    print(f"Total: {total_tests}")
    print(f"Passed: {passed_tests}")
    print(f"Failed: {len(failed_tests)}")

    if failed_tests:
        print("\nFailed tests:")
        for class_name, method_name, error in failed_tests:
            print(f"  - {class_name}.{method_name}: {error}")
        return False
    else:
        print("\n✅ All service tests passed!")
        return True


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
