#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import unittest
from importlib.util import find_spec
from unittest.mock import patch
from cc8.constants import APP_NAME
from cc8.renderers.r_null import Renderer as NullRenderer


class TestNullRenderer(unittest.TestCase):
    def test_null_renderer_title(self):
        renderer = NullRenderer()
        self.assertEqual("", renderer.title)
        renderer.set_title("Test")
        self.assertEqual("Test", renderer.title)


@unittest.skipUnless(find_spec("pygame"), "PyGame is not installed")
class TestPyGameRenderer(unittest.TestCase):
    def setUp(self):
        # No real window is needed
        patcher = patch.dict(os.environ, {"SDL_VIDEODRIVER": "dummy"})
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_pygame_renderer_keeps_title(self):
        import pygame
        from cc8.renderers.r_pygame import Renderer

        renderer = Renderer(scale=128)

        try:
            self.assertEqual(APP_NAME, renderer.title)
            self.assertEqual(APP_NAME, pygame.display.get_caption()[0])
            self.assertEqual((0, 0), (renderer.width, renderer.height))
        finally:
            renderer.shutdown()
