"""Toolkit-neutral helpers shared by the panel front ends."""
