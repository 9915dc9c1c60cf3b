"""prompt_demo.py"""
import shlex

from prompt_toolkit import PromptSession

from argtree.completer import ArgumentCompleter
from argtree.config import loader

parser = loader("deploy.yaml")

if __name__ == "__main__":
    session = PromptSession("argtree > ", completer=ArgumentCompleter(parser))
    text = session.prompt()
    print(parser.parse_args(shlex.split(text)).to_dict())
