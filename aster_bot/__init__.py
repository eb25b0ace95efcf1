"""Aster Dex single-asset trend trading bot."""
