#!/usr/bin/env python3
"""
Database configuration modules.

- integrity_check_configs: Orphan and entry integrity check definitions
"""
