"""Recompute pipeline that assembles every derived structure into one snapshot."""
