from rich.pretty import pprint

from argrammar import *


class Configuration(ConfigMap):
    verbose = setting("verbose", False)
    outfile = setting("outfile", "-")
    infile = setting("infile", "")


parser = Parser(Configuration, prog="simple", shell=True, colorful=True)

parser.option("-v").name("--verbose").description("active verbose output").key("verbose")
parser.option("-o").value_name("OUT").default("-").description("output filename, default: stdout").key("outfile")
parser.separator("-", 50)
parser.positional("infile").required().description("input filename").key("infile")


if __name__ == '__main__':
    pprint(parser.run())
