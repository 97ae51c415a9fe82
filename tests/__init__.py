"""Tests for the Mitsubishi WF-RAC integration."""
