"""Development-time mod loader: fetch a manifest's resources from a local server into the host page."""
