"""

Command line utility to infer classes from a JSON sample document and generate Java POJOs.

"""


import argparse
import json
import logging
import os
import sys
import tempfile
from pojotize import _version
from pojotize.constants import DEFAULT_ROOT_CLASS_NAME
from pojotize.errors import PojotizeError

ARG_TYPES = {'str': str, 'int': int, 'float': float}


def load_commands():
    """Load the commands from the commands.json file."""
    commands_path = os.path.join(os.path.dirname(__file__), 'commands.json')
    with open(commands_path, 'r', encoding='utf-8') as f:
        return json.load(f)


def create_subparsers(subparsers, commands):
    """Create subparsers for the commands."""
    for command in commands:
        cmd_parser = subparsers.add_parser(command['command'], help=command['description'])
        for arg in command['args']:
            kwargs = {
                'help': arg['help'],
            }
            if 'nargs' in arg:
                kwargs['nargs'] = arg['nargs']
            if 'choices' in arg:
                kwargs['choices'] = arg['choices']
            if 'default' in arg:
                kwargs['default'] = arg['default']
            if arg['type'] == 'bool':
                kwargs['action'] = 'store_true'
            else:
                kwargs['type'] = ARG_TYPES[arg['type']]
            carg = cmd_parser.add_argument(arg['name'], **kwargs)
            if arg['name'].startswith('-'):
                carg.required = arg.get('required', True)


def dynamic_import(module, func):
    """Dynamically import a module and function."""
    mod = __import__(module, fromlist=[func])
    return getattr(mod, func)


def resolve_function_args(command, args, input_file_path, output_file_path):
    """Map the parsed command line onto the keyword arguments of the command function."""
    func_args = {}
    for arg, val in command['function']['args'].items():
        if val == 'input_file_path':
            func_args[arg] = input_file_path
        elif val == 'output_file_path':
            if output_file_path:
                func_args[arg] = output_file_path
        elif val.startswith('not args.'):
            func_args[arg] = not getattr(args, val[9:], False)
        elif val.startswith('args.'):
            if hasattr(args, val[5:]):
                func_args[arg] = getattr(args, val[5:])
        else:
            func_args[arg] = val
    return func_args


def main():
    """Main function for the command line utility."""
    commands = load_commands()
    parser = argparse.ArgumentParser(description='Infer classes from a JSON sample document and generate Java POJOs.')
    parser.add_argument('--version', action='store_true', help='Print the version of pojotize.')
    parser.add_argument('--verbose', action='store_true', help='Log inference details to stderr.')

    subparsers = parser.add_subparsers(dest='command')
    create_subparsers(subparsers, commands)

    args = parser.parse_args()

    if 'version' in args and args.version:
        print(f'pojotize {_version.version}')
        return

    if args.command is None:
        parser.print_help()
        return

    logging.basicConfig(level=logging.DEBUG if getattr(args, 'verbose', False) else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    temp_input = None
    temp_output = None
    try:
        command = next((cmd for cmd in commands if cmd['command'] == args.command), None)
        if not command:
            print(f"Error: Command {args.command} not found.")
            sys.exit(1)

        input_file_path = getattr(args, 'input', None)
        if input_file_path is None:
            temp_input = tempfile.NamedTemporaryFile(delete=False, mode='w', encoding='utf-8', suffix='.json')
            input_file_path = temp_input.name
            temp_input.write(sys.stdin.read())
            temp_input.close()
            if not getattr(args, 'root', None):
                args.root = DEFAULT_ROOT_CLASS_NAME

        suppress_print = False
        output_file_path = getattr(args, 'out', None)
        if output_file_path is None:
            suppress_print = True
            temp_output = tempfile.NamedTemporaryFile(delete=False)
            temp_output.close()
            output_file_path = temp_output.name

        def printmsg(s):
            if not suppress_print:
                print(s)

        module_name, func_name = command['function']['name'].rsplit('.', 1)
        func = dynamic_import(module_name, func_name)
        func_args = resolve_function_args(command, args, input_file_path, output_file_path)
        printmsg(f'Executing {command["description"]} with input {input_file_path} and output {output_file_path}')
        func(**func_args)

        if temp_output:
            with open(output_file_path, 'r', encoding='utf-8') as f:
                sys.stdout.write(f.read())

    except (PojotizeError, OSError) as e:
        print("Error: ", str(e))
        sys.exit(1)
    finally:
        for temp in (temp_input, temp_output):
            if temp:
                try:
                    os.remove(temp.name)
                except OSError as e:
                    print(f"Error: Could not delete temporary file {temp.name}. {e}")


if __name__ == "__main__":
    main()
