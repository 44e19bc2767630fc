from __future__ import annotations

import unittest

from pages import (
    PAGE_TYPES,
    ContactPage,
    HomePage,
    Navigator,
    dispatch,
)


class TestPages(unittest.TestCase):
    def test_keys_are_unique(self) -> None:
        keys = [p.key for p in PAGE_TYPES]
        self.assertEqual(len(keys), len(set(keys)))
        self.assertEqual(len(PAGE_TYPES), 9)

    def test_dispatch_requires_every_handler(self) -> None:
        handlers = {t: (lambda p: p.key) for t in PAGE_TYPES}
        self.assertEqual(dispatch(ContactPage(), handlers), "contact")
        del handlers[ContactPage]
        with self.assertRaises(ValueError):
            dispatch(HomePage(), handlers)

    def test_navigator(self) -> None:
        nav = Navigator()
        self.assertEqual(nav.current, HomePage())
        nav.navigate(ContactPage())
        self.assertEqual(nav.current, ContactPage())
        with self.assertRaises(TypeError):
            nav.navigate("contact")


if __name__ == "__main__":
    unittest.main()
