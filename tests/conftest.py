#!/usr/bin/env python3
"""
Pytest Configuration and Shared Fixtures

Provides common fixtures and markers for testing the orrery package,
the export tool and the viewer.
"""

import math
import os
import sys
from pathlib import Path

import pytest

# Add parent directory for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Pygame must not open a real window during tests
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


# =============================================================================
# PYTEST MARKERS
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "viewer: mark test as exercising the pygame viewer"
    )
    config.addinivalue_line(
        "markers", "integration: mark as integration test"
    )


# =============================================================================
# CATALOG FIXTURES
# =============================================================================

@pytest.fixture
def solar_catalog():
    """Compiled-in Sun plus eight planets at the default AU scale."""
    from orrery import create_solar_system_catalog
    return create_solar_system_catalog()


@pytest.fixture
def sun():
    from orrery import Body
    return Body(name="Sun", orbit_radius=0.0, mass=300.0, angular_speed=0.0, size=10.0)


@pytest.fixture
def planet():
    """Body at radius 50 with a period of one time unit."""
    from orrery import Body
    return Body(
        name="Planet",
        orbit_radius=50.0,
        mass=1.0,
        angular_speed=2 * math.pi,
        size=1.0,
    )


@pytest.fixture
def two_body_catalog(sun, planet):
    from orrery import BodyCatalog
    return BodyCatalog([sun, planet])


# =============================================================================
# SYSTEM FIXTURES
# =============================================================================

@pytest.fixture
def system():
    """Solar system with default configuration."""
    from orrery import SolarSystem
    return SolarSystem()


@pytest.fixture
def departed_system():
    """Solar system with an Earth -> Mars transfer departed at t=10."""
    from orrery import SolarSystem
    s = SolarSystem()
    s.start_transfer("Earth", "Mars", 10.0)
    return s
