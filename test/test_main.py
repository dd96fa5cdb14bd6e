import argparse
import io
import json
import os
import shutil
import sys
import tempfile
import unittest
from unittest.mock import patch

import pytest

current_script_path = os.path.abspath(__file__)
project_root = os.path.dirname(os.path.dirname(current_script_path))
sys.path.append(project_root)

from pojotize.pojotize import main


def get_json():
    """Provides the JSON input file path."""
    return os.path.join(os.path.dirname(__file__), 'json', 'root.json')


def get_orders_json():
    """Provides the larger JSON input file path."""
    return os.path.join(os.path.dirname(__file__), 'json', 'orders.json')


OUTPUT_DIR = os.path.join(tempfile.gettempdir(), 'pojotize', 'main-java')
MODEL_PATH = os.path.join(tempfile.gettempdir(), 'pojotize', 'output.model.json')


class TestMain(unittest.TestCase):

    def setUp(self):
        shutil.rmtree(OUTPUT_DIR, ignore_errors=True)
        if os.path.exists(MODEL_PATH):
            os.remove(MODEL_PATH)

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None))
    def test_main_no_command(self, mock_parse_args):
        """Test main function with no command."""
        with patch('builtins.print'):
            main()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(command=None, version=True))
    def test_main_version(self, mock_parse_args):
        """Test main function with --version."""
        with patch('builtins.print') as mock_print:
            main()
        mock_print.assert_called_once()
        self.assertTrue(mock_print.call_args[0][0].startswith('pojotize '))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='j2pojo', input=get_json(), out=OUTPUT_DIR, root=None, package='com.example',
        no_m_prefix=False, always_expose=False, strict=False))
    def test_main_j2pojo_command(self, mock_parse_args):
        """Test main function with j2pojo command."""
        main()
        assert os.path.exists(os.path.join(OUTPUT_DIR, 'com', 'example', 'Root.java'))
        assert os.path.exists(os.path.join(OUTPUT_DIR, 'com', 'example', 'Child.java'))

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='j2pojo', input=get_json(), out=OUTPUT_DIR, root='Document', package='',
        no_m_prefix=True, always_expose=False, strict=False))
    def test_main_j2pojo_command_options(self, mock_parse_args):
        """Test main function with j2pojo command, root name and no field prefix."""
        main()
        path = os.path.join(OUTPUT_DIR, 'Document.java')
        assert os.path.exists(path)
        with open(path, 'r', encoding='utf-8') as f:
            assert 'private Long Id;' in f.read()

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='j2model', input=get_json(), out=MODEL_PATH, root=None, strict=False))
    def test_main_j2model_command(self, mock_parse_args):
        """Test main function with j2model command."""
        main()
        with open(MODEL_PATH, 'r', encoding='utf-8') as f:
            model = json.load(f)
        assert [c['name'] for c in model['classes']] == ['Root', 'child']

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='j2model', input=None, out=None, root=None, strict=False))
    def test_main_j2model_stdin_stdout(self, mock_parse_args):
        """Test main function reading stdin and writing the model to stdout."""
        stdout = io.StringIO()
        with patch('sys.stdin', io.StringIO('{"b": 1, "a": {"x": true}}')), patch('sys.stdout', stdout):
            main()
        model = json.loads(stdout.getvalue())
        assert [c['name'] for c in model['classes']] == ['Root', 'a']
        assert [f['name'] for f in model['classes'][0]['fields']] == ['a', 'b']

    @patch('argparse.ArgumentParser.parse_args', return_value=argparse.Namespace(
        command='j2model', input=get_orders_json(), out=MODEL_PATH, root=None, strict=True))
    def test_main_j2model_strict(self, mock_parse_args):
        """Test that the orders sample has no type conflicts in strict mode."""
        main()
        assert os.path.exists(MODEL_PATH)

    def test_main_invalid_root(self):
        """Test that a non-object document exits with an error."""
        input_path = os.path.join(tempfile.gettempdir(), 'pojotize-array.json')
        with open(input_path, 'w', encoding='utf-8') as f:
            f.write('[1, 2]')
        args = argparse.Namespace(command='j2model', input=input_path, out=MODEL_PATH, root=None, strict=False)
        with patch('argparse.ArgumentParser.parse_args', return_value=args), patch('builtins.print') as mock_print:
            with pytest.raises(SystemExit) as excinfo:
                main()
        assert excinfo.value.code == 1
        assert mock_print.call_args[0][0] == "Error: "
        os.remove(input_path)

    def test_main_deeply_nested_document(self):
        """Test that deep nesting writes a model or exits with an error, never a traceback."""
        input_path = os.path.join(tempfile.gettempdir(), 'pojotize-deep.json')
        with open(input_path, 'w', encoding='utf-8') as f:
            f.write('{"a":' * 5000 + '1' + '}' * 5000)
        args = argparse.Namespace(command='j2model', input=input_path, out=MODEL_PATH, root=None, strict=False)
        try:
            with patch('argparse.ArgumentParser.parse_args', return_value=args), patch('builtins.print') as mock_print:
                try:
                    main()
                except SystemExit as e:
                    assert e.code == 1
                    assert mock_print.call_args[0][0] == "Error: "
                else:
                    with open(MODEL_PATH, 'r', encoding='utf-8') as f:
                        model = json.load(f)
                    assert [c['name'] for c in model['classes']] == ['PojotizeDeep', 'a']
        finally:
            os.remove(input_path)


if __name__ == '__main__':
    unittest.main()
