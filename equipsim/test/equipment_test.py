#===============================================================================
# MODULE equipment_test
#
# Unit tests for EquipmentUnit, make_equipment and Project request generation
#===============================================================================
from equipsim.arrivals import RandomSource, next_project
from equipsim.config import DEFAULTS
from equipsim.entities import Project, RequestStatus, make_projects
from equipsim.errors import InvariantError
from equipsim.stations import EquipmentUnit, UnitStatus, make_equipment
from equipsim.test.testutils import make_request
import unittest


class EquipmentAssignTests(unittest.TestCase):
    "Tests for EquipmentUnit.assign"
    def setUp(self):
        self.unit = EquipmentUnit(1, "crane")
        self.req = make_request(2, arrival_time=3.0, duration=6.5)

    def testInitiallyFree(self):
        "Test: new unit is free with no request and no busy time"
        self.assertTrue(self.unit.is_free)
        self.assertIsNone(self.unit.current_request)
        self.assertEqual(self.unit.busy_time, 0.0)

    def testAssign(self):
        "Test: assign sets busy, wait time, completion time and busy time"
        self.unit.assign(self.req, 5.0)
        self.assertIs(self.unit.status, UnitStatus.BUSY)
        self.assertIs(self.unit.current_request, self.req)
        self.assertAlmostEqual(self.req.wait_time, 2.0)
        self.assertAlmostEqual(self.unit.completion_time, 11.5)
        self.assertAlmostEqual(self.unit.busy_time, 6.5)

    def testAssignBusyRaises(self):
        "Test: assigning a busy unit raises InvariantError"
        self.unit.assign(self.req, 5.0)
        self.assertRaises(InvariantError, self.unit.assign, make_request(1), 6.0)

    def testBusyTimeAccumulates(self):
        "Test: busy time grows by each full service duration"
        self.unit.assign(self.req, 5.0)
        self.unit.complete(20.0)
        self.unit.assign(make_request(1, arrival_time=20.0, duration=7.0), 20.0)
        self.assertAlmostEqual(self.unit.busy_time, 13.5)


class EquipmentCompleteTests(unittest.TestCase):
    "Tests for EquipmentUnit.complete"
    def setUp(self):
        self.unit = EquipmentUnit(1, "crane")
        self.req = make_request(2, arrival_time=0.0, duration=6.0)
        self.unit.assign(self.req, 1.0)

    def testNotDue(self):
        "Test: complete before completion time is a no-op"
        self.assertIsNone(self.unit.complete(6.9))
        self.assertFalse(self.unit.is_free)
        self.assertIsNone(self.req.completion_time)

    def testDue(self):
        "Test: complete at completion time frees the unit and stamps the request"
        self.assertIs(self.unit.complete(7.0), self.req)
        self.assertTrue(self.unit.is_free)
        self.assertIsNone(self.unit.current_request)
        self.assertEqual(self.req.completion_time, 7.0)

    def testStatusLeftToLog(self):
        "Test: complete does not write terminal status itself"
        self.unit.complete(8.0)
        self.assertIs(self.req.status, RequestStatus.PENDING)

    def testIdleComplete(self):
        "Test: complete on a free unit returns None"
        self.unit.complete(8.0)
        self.assertIsNone(self.unit.complete(9.0))

    def testBusyIffRequest(self):
        "Test: status busy exactly when a request is held"
        for t in (2.0, 7.5):
            self.unit.complete(t)
            self.assertEqual(self.unit.is_free, self.unit.current_request is None)


class ProjectTests(unittest.TestCase):
    "Tests for Project and the variate source"
    def testPriorityEqualsId(self):
        "Test: projects are numbered from 1 and priority equals id"
        projects = make_projects(3)
        self.assertEqual([p.pid for p in projects], [1, 2, 3])
        self.assertEqual([p.priority for p in projects], [1, 2, 3])

    def testGenerateRequest(self):
        "Test: generated request is pending, stamped, and within ranges"
        rng = RandomSource(5)
        kinds = DEFAULTS["equipment"]["kinds"]
        for _ in range(50):
            r = Project(4).generate_request(12.5, rng, (6.0, 8.0), kinds)
            self.assertIs(r.status, RequestStatus.PENDING)
            self.assertEqual(r.source_id, 4)
            self.assertEqual(r.priority, 4)
            self.assertEqual(r.arrival_time, 12.5)
            self.assertEqual(r.wait_time, 0.0)
            self.assertIsNone(r.completion_time)
            self.assertTrue(6.0 <= r.service_duration <= 8.0)
            self.assertIn(r.equipment_kind, kinds)

    def testSeededStreamRepeats(self):
        "Test: same seed, same draws"
        a, b = RandomSource(9), RandomSource(9)
        self.assertEqual([a.exponential(2.0) for _ in range(5)],
                         [b.exponential(2.0) for _ in range(5)])

    def testExponentialPositive(self):
        "Test: exponential gaps are positive"
        rng = RandomSource(1)
        self.assertTrue(all(rng.exponential(2.0) > 0 for _ in range(200)))

    def testNextProject(self):
        "Test: next_project picks one of the given projects"
        projects = make_projects(4)
        rng = RandomSource(2)
        picked = {next_project(projects, rng).pid for _ in range(200)}
        self.assertEqual(picked, {1, 2, 3, 4})

    def testMakeEquipment(self):
        "Test: make_equipment builds count units with configured kinds"
        units = make_equipment(DEFAULTS, RandomSource(3))
        self.assertEqual([u.eid for u in units], list(range(1, 13)))
        for u in units:
            self.assertIn(u.kind, DEFAULTS["equipment"]["kinds"])
            self.assertTrue(u.is_free)


def makeTestSuite():
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()
    suite.addTest(loader.loadTestsFromTestCase(EquipmentAssignTests))
    suite.addTest(loader.loadTestsFromTestCase(EquipmentCompleteTests))
    suite.addTest(loader.loadTestsFromTestCase(ProjectTests))
    return suite

if __name__ == '__main__':
    unittest.main()
