"""Unit tests for the experience factory helpers."""

import unittest
from unittest.mock import MagicMock, patch

from blinkscape.conf import settings
from blinkscape.helpers import create_experience
from blinkscape.systems.assets import LocalAssetLoader
from blinkscape.systems.transition import ArcadeFadeOverlay
from blinkscape.types import Vec3
from tests.helpers import FakeCamera, FakeLoader


@patch("blinkscape.helpers.setup_resources")
@patch("blinkscape.helpers.setup_logging")
class TestCreateExperience(unittest.TestCase):
    """Unit test class for create_experience()."""

    def test_wires_everything_from_settings(self, mock_logging: MagicMock, mock_resources: MagicMock) -> None:
        """Test the experience is built from the configured settings."""
        camera = FakeCamera()
        camera.position = Vec3(9, 9, 9)

        experience = create_experience(MagicMock(), camera)

        mock_logging.assert_called_once_with("DEBUG")
        mock_resources.assert_called_once_with("test_assets", None)
        assert camera.position == Vec3(0, 2, 3)
        assert experience.registry.total_count == len(settings.SCENES)
        assert experience.registry.descriptor_at(0).id == settings.SCENES[0]["id"]
        assert isinstance(experience.registry.loader, LocalAssetLoader)
        assert experience.registry.transition_cue is None
        assert isinstance(experience.controller.overlay, ArcadeFadeOverlay)
        assert experience.controller.fade_duration_ms == 0
        assert experience.detector.required_duration_ms == 3000
        assert experience.gaze is not None

    def test_custom_loader_and_cue(self, mock_logging: MagicMock, mock_resources: MagicMock) -> None:  # noqa: ARG002
        """Test a supplied loader is used and a cue sound enables the cue."""
        settings.configure(TRANSITION_CUE_SOUND="sounds/whoosh.ogg")
        loader = FakeLoader()

        experience = create_experience(MagicMock(), FakeCamera(), loader=loader)

        assert experience.registry.loader is loader
        assert experience.registry.transition_cue.sound_file == "sounds/whoosh.ogg"
