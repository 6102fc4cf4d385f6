"""pv - panorama viewer: view-state controller for 360° equirectangular images."""

__version__ = "0.1.0"
