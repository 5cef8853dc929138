"""Test untuk database/database_manager.py.

File ini menguji:
- Load data referensi bawaan paket (standar, pengolahan, penyakit)
- Error untuk file hilang / JSON rusak
- Penambahan penyakit ke katalog

Jalankan dengan: python airbersih/tests/test_database.py
"""

import sys
import os
import json
import tempfile
import shutil
from pathlib import Path

# Tambahkan root repo ke Python path
root_dir = Path(__file__).parent.parent.parent
sys.path.insert(0, str(root_dir))

from airbersih.database.database_manager import ReferenceDataManager, DEFAULT_DB_PATH
from airbersih.core.models import DiseaseRecord
from airbersih.exceptions import ReferenceDataError


class TestBundledReferenceData:
    """Test data referensi bawaan paket."""

    def setup_method(self):
        self.db = ReferenceDataManager()

    def test_load_standards(self):
        standards = self.db.load_standards()
        names = [s.parameter for s in standards]

        assert len(standards) >= 7
        for expected in ("Turbidity", "pH", "Iron", "Manganese", "Nitrate", "Coliform", "E. coli"):
            assert expected in names, expected

        print(f"✓ Standards loaded: {len(standards)}")

    def test_bands_are_consistent(self):
        """Band bahaya selalu di atas band waspada."""
        for standard in self.db.load_standards():
            assert standard.danger_min is not None and standard.danger_max is not None
            assert standard.danger_min <= standard.danger_max
            if standard.warning_max is not None:
                assert standard.warning_min <= standard.warning_max < standard.danger_min

        print(f"✓ Standard bands consistent")

    def test_load_treatments_and_diseases(self):
        treatments = self.db.load_treatments()
        diseases = self.db.load_diseases()

        assert treatments[0].method == "Chlorination"
        assert len(treatments) >= 3
        assert "Cholera" in [d.name for d in diseases]

        print(f"✓ Treatments: {len(treatments)}, diseases: {len(diseases)}")

    def test_get_standard(self):
        assert self.db.get_standard("PH").parameter == "pH"
        assert self.db.get_standard("ecoli").parameter == "E. coli"
        assert self.db.get_standard("e-coli").parameter == "E. coli"
        assert self.db.get_standard("arsenic") is None

        print(f"✓ get_standard tolerates case and format")


class TestReferenceDataManager:
    """Test error handling dan penulisan katalog pada folder sementara."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        for filename in ("standards.json", "treatments.json", "diseases.json"):
            shutil.copy(os.path.join(DEFAULT_DB_PATH, filename), self.temp_dir)
        self.db = ReferenceDataManager(self.temp_dir)

    def teardown_method(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, filename, content):
        with open(os.path.join(self.temp_dir, filename), 'w', encoding='utf-8') as f:
            f.write(content)

    def test_missing_file(self):
        os.remove(os.path.join(self.temp_dir, "standards.json"))

        try:
            self.db.load_standards()
        except ReferenceDataError as e:
            assert e.path.endswith("standards.json")
        else:
            raise AssertionError("ReferenceDataError expected")

        print(f"✓ Missing file raises ReferenceDataError")

    def test_invalid_json(self):
        self._write("treatments.json", "[{broken")

        try:
            self.db.load_treatments()
        except ReferenceDataError:
            pass
        else:
            raise AssertionError("ReferenceDataError expected")

        print(f"✓ Invalid JSON raises ReferenceDataError")

    def test_not_a_list(self):
        self._write("diseases.json", json.dumps({"name": "Cholera"}))

        try:
            self.db.load_diseases()
        except ReferenceDataError:
            pass
        else:
            raise AssertionError("ReferenceDataError expected")

        print(f"✓ Non-list payload raises ReferenceDataError")

    def test_malformed_entry(self):
        self._write("standards.json", json.dumps([{"unit": "mg/L"}]))

        try:
            self.db.load_standards()
        except ReferenceDataError:
            pass
        else:
            raise AssertionError("ReferenceDataError expected")

        print(f"✓ Malformed entry raises ReferenceDataError")

    def test_get_standard_underscore_variant(self):
        self._write("standards.json", json.dumps([
            {"parameter": "Total Coliform", "warning_min": 1, "warning_max": 10,
             "danger_min": 10.01, "danger_max": 1000000},
        ]))

        assert self.db.get_standard("total_coliform").parameter == "Total Coliform"
        assert self.db.get_standard("TOTAL COLIFORM").parameter == "Total Coliform"

        print(f"✓ get_standard underscore/space variants")

    def test_reads_fresh_each_call(self):
        """Perubahan file langsung terlihat pada pemanggilan berikutnya."""
        self._write("standards.json", json.dumps([]))

        assert self.db.load_standards() == []

        print(f"✓ No caching of reference data")

    def test_add_disease(self):
        before = len(self.db.load_diseases())
        self.db.add_disease(DiseaseRecord("Giardiasis", "parasitic", "medium", "Bloating", "Giardia lamblia"))

        diseases = self.db.load_diseases()
        assert len(diseases) == before + 1
        assert diseases[-1].cause == "Giardia lamblia"

        try:
            self.db.add_disease(DiseaseRecord("giardiasis"))
        except ValueError:
            pass
        else:
            raise AssertionError("ValueError expected for duplicate disease")

        print(f"✓ Disease added, duplicate rejected")


def run_all_tests():
    """Run all database tests."""
    print("\n" + "=" * 60)
    print("Testing Database")
    print("=" * 60)

    test_classes = [TestBundledReferenceData, TestReferenceDataManager]
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
        print("\n✅ All database tests passed!")
        return True


if __name__ == '__main__':
    success = run_all_tests()
    sys.exit(0 if success else 1)
