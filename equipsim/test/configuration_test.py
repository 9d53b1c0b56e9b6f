#===============================================================================
# MODULE configuration_test
#
# Unit tests for config loading, overrides and validation
#===============================================================================
from equipsim.config import DEFAULTS, load_cfg, apply_overrides, validate
from equipsim.errors import ConfigError
import copy, os, tempfile, unittest


class OverrideTests(unittest.TestCase):
    "Tests for apply_overrides"
    def testNestedMerge(self):
        "Test: nested keys merge, siblings survive"
        cfg = apply_overrides(DEFAULTS, {"sim": {"arrival_rate": 3.0}})
        self.assertEqual(cfg["sim"]["arrival_rate"], 3.0)
        self.assertEqual(cfg["sim"]["arrival_budget"], 2500)

    def testBaseUntouched(self):
        "Test: the base config is not mutated"
        before = copy.deepcopy(DEFAULTS)
        apply_overrides(DEFAULTS, {"buffer": {"capacity": 1}, "equipment": {"kinds": ["crane"]}})
        self.assertEqual(DEFAULTS, before)


class ValidateTests(unittest.TestCase):
    "Tests for validate"
    def bad(self, overrides):
        return lambda: validate(apply_overrides(DEFAULTS, overrides))

    def testDefaultsValid(self):
        "Test: reference parameters validate"
        cfg = validate(copy.deepcopy(DEFAULTS))
        self.assertEqual(cfg["projects"]["count"], 10)
        self.assertEqual(cfg["equipment"]["count"], 12)
        self.assertEqual(cfg["buffer"]["capacity"], 10)
        self.assertEqual((cfg["service"]["min"], cfg["service"]["max"]), (6.0, 8.0))

    def testZeroBudgetAllowed(self):
        "Test: arrival budget 0 is a valid (empty) run"
        validate(apply_overrides(DEFAULTS, {"sim": {"arrival_budget": 0}}))

    def testBadValues(self):
        "Test: invalid parameters raise ConfigError"
        for overrides in (
            {"buffer": {"capacity": 0}},
            {"equipment": {"count": -1}},
            {"projects": {"count": 2.5}},
            {"sim": {"arrival_budget": -5}},
            {"sim": {"arrival_rate": 0}},
            {"service": {"min": 9.0, "max": 8.0}},
            {"service": {"min": 0.0}},
            {"equipment": {"kinds": []}},
            {"equipment": {"kinds": "crane"}},
            {"equipment": {"kinds": ["crane", 3]}},
            {"equipment": {"kinds": None}},
        ):
            with self.subTest(overrides=overrides):
                self.assertRaises(ConfigError, self.bad(overrides))


class LoadTests(unittest.TestCase):
    "Tests for load_cfg"
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".yaml")
        os.close(fd)

    def tearDown(self):
        os.remove(self.path)

    def write(self, text):
        with open(self.path, "w") as f:
            f.write(text)

    def testLoadMergesOverDefaults(self):
        "Test: YAML values override defaults, missing keys fall back"
        self.write("sim:\n  seed: 4\nbuffer:\n  capacity: 5\n")
        cfg = load_cfg(self.path)
        self.assertEqual(cfg["sim"]["seed"], 4)
        self.assertEqual(cfg["buffer"]["capacity"], 5)
        self.assertEqual(cfg["equipment"]["count"], 12)

    def testEmptyFile(self):
        "Test: an empty YAML file yields the defaults"
        self.write("")
        self.assertEqual(load_cfg(self.path)["projects"]["count"], 10)

    def testInvalidYamlValue(self):
        "Test: invalid value in YAML raises ConfigError"
        self.write("service:\n  min: 10\n  max: 2\n")
        self.assertRaises(ConfigError, load_cfg, self.path)

    def testNonMapping(self):
        "Test: a YAML list at top level raises ConfigError"
        self.write("- 1\n- 2\n")
        self.assertRaises(ConfigError, load_cfg, self.path)

    def testDefaultPath(self):
        "Test: load_cfg() with no path returns a validated config"
        cfg = load_cfg()
        self.assertIn("arrival_rate", cfg["sim"])


def makeTestSuite():
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTest(loader.loadTestsFromTestCase(OverrideTests))
    suite.addTest(loader.loadTestsFromTestCase(ValidateTests))
    suite.addTest(loader.loadTestsFromTestCase(LoadTests))
    return suite

if __name__ == '__main__':
    unittest.main()
