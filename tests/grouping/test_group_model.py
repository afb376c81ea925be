import unittest

from auto_changeset.grouping.group_model import Category, Changeset, VersionBump


class TestGroupModel(unittest.TestCase):
    def test_version_bump_ordering(self) -> None:
        self.assertLess(VersionBump.PATCH, VersionBump.MINOR)
        self.assertLess(VersionBump.MINOR, VersionBump.MAJOR)
        self.assertGreater(VersionBump.MAJOR, VersionBump.PATCH)
        self.assertGreaterEqual(VersionBump.MAJOR, VersionBump.MINOR)
        self.assertGreaterEqual(VersionBump.MINOR, VersionBump.MINOR)
        self.assertLessEqual(VersionBump.PATCH, VersionBump.MINOR)
        self.assertLessEqual(VersionBump.PATCH, VersionBump.PATCH)
        self.assertFalse(VersionBump.PATCH >= VersionBump.MAJOR)
        self.assertEqual(max([VersionBump.MINOR, VersionBump.MAJOR, VersionBump.PATCH]), VersionBump.MAJOR)

    def test_category_display_order(self) -> None:
        self.assertEqual(
            [c.value for c in Category],
            ["features", "bugFixes", "refactoring", "performance", "documentation", "chores", "others"],
        )

    def test_changeset_defaults(self) -> None:
        changeset = Changeset(package="ui", bump=VersionBump.MINOR)
        self.assertEqual(changeset.items, {})
        self.assertIsNone(changeset.related_link)


if __name__ == "__main__":
    unittest.main()
