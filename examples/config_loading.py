"""config_loading.py"""

from argtree.config import loader

parser = loader("deploy.yaml")

if __name__ == "__main__":
    import sys

    if not parser.print_usage_if_help_requested(sys.argv[1:]):
        print(parser.parse_args(sys.argv[1:]).to_dict())
