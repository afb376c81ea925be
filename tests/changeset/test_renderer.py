import unittest

from auto_changeset.changeset.renderer import link_label, render_changeset, render_summary
from auto_changeset.grouping.group_model import Category, Changeset, VersionBump


class TestRenderer(unittest.TestCase):
    def test_render_without_link(self) -> None:
        changeset = Changeset(
            package="ui",
            bump=VersionBump.MINOR,
            items={Category.FEATURES: ["add button (1111111)"]},
        )

        self.assertEqual(
            render_changeset(changeset),
            '---\n"ui": minor\n---\n\n-   **New Features**\n    -   add button (1111111)\n',
        )

    def test_render_with_link_and_fixed_order(self) -> None:
        # Insertion order of items must not matter.
        changeset = Changeset(
            package="@acme/core",
            bump=VersionBump.MAJOR,
            items={
                Category.OTHERS: ["fix!: null deref (2222222)"],
                Category.DOCUMENTATION: ["usage (3333333)"],
                Category.BUG_FIXES: ["crash (4444444)", "leak (5555555)"],
            },
            related_link="https://github.com/acme/repo/pull/42",
        )

        expected = (
            "---\n"
            '"@acme/core": major\n'
            "---\n"
            "\n"
            "-   **Bug Fixes**\n"
            "    -   crash (4444444)\n"
            "    -   leak (5555555)\n"
            "-   **Documentation**\n"
            "    -   usage (3333333)\n"
            "-   **Other Changes**\n"
            "    -   fix!: null deref (2222222)\n"
            "\n"
            "**Related PR**: [#42](https://github.com/acme/repo/pull/42)\n"
        )
        self.assertEqual(render_changeset(changeset), expected)

    def test_explicit_link_overrides_changeset(self) -> None:
        changeset = Changeset(package="ui", bump=VersionBump.PATCH, items={Category.CHORES: ["x (1234567)"]})
        text = render_changeset(changeset, "https://example.com/pull/9/")
        self.assertTrue(text.endswith("**Related PR**: [#9](https://example.com/pull/9/)\n"))

    def test_empty_categories_are_omitted(self) -> None:
        self.assertEqual(render_summary({Category.FEATURES: []}), "")

    def test_rendering_is_deterministic(self) -> None:
        changeset = Changeset(package="ui", bump=VersionBump.PATCH, items={Category.CHORES: ["x (1234567)"]})
        self.assertEqual(render_changeset(changeset), render_changeset(changeset))

    def test_link_label(self) -> None:
        self.assertEqual(link_label("https://github.com/o/r/pull/123"), "123")
        self.assertEqual(link_label("https://github.com/o/r/pull/123/"), "123")
        self.assertEqual(link_label("https://github.com/o/r/pull/123?tab=files"), "123")


if __name__ == "__main__":
    unittest.main()
