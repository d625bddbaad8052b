"""
Tests for STG Core No I/O Imports.

Tests:
- No execution imports (subprocess, os, threading)
- No network imports
- No body/authority imports (core defines law, never enforces it)
"""
import inspect
import os

import pytest

import alive_stg.core.gate_engine as gate_engine
import alive_stg.core.gate_invariants as gate_invariants
import alive_stg.core.gate_policy as gate_policy
import alive_stg.core.gate_types as gate_types

PURE_MODULES = [gate_engine, gate_invariants, gate_policy, gate_types]


class TestNoForbiddenImports:

    @pytest.mark.parametrize("module", PURE_MODULES)
    def test_no_subprocess_import(self, module):
        assert 'import subprocess' not in inspect.getsource(module)

    @pytest.mark.parametrize("module", PURE_MODULES)
    def test_no_os_import(self, module):
        assert 'import os' not in inspect.getsource(module)

    @pytest.mark.parametrize("module", PURE_MODULES)
    def test_no_threading_import(self, module):
        assert 'import threading' not in inspect.getsource(module)

    @pytest.mark.parametrize("module", PURE_MODULES)
    def test_no_network_import(self, module):
        source = inspect.getsource(module)
        assert 'socket' not in source
        assert 'requests' not in source
        assert 'fastapi' not in source

    @pytest.mark.parametrize("module", PURE_MODULES)
    def test_no_wall_clock(self, module):
        source = inspect.getsource(module)
        assert 'time.time' not in source
        assert 'datetime.now' not in source

    def test_no_body_imports(self):
        module_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
        for filename in os.listdir(module_dir):
            if filename.endswith('.py'):
                with open(os.path.join(module_dir, filename), 'r') as f:
                    content = f.read()
                assert 'alive_stg.body' not in content
                assert 'alive_stg.authority' not in content
