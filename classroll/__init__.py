"""Classroll – class rosters, attendance and random student picks."""
