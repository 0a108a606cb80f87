"""Argument parser for the contactor command line."""

import argparse
from pathlib import Path

from contactor.application import FORMAT_CSV, FORMAT_FILE, FORMAT_TEXT, FORMAT_VCF

# Property-map key -> (short flag, long flag, help).
CONTACT_OPTIONS = {
    "first": ("-f", "--first", "Contact first name"),
    "last": ("-l", "--last", "Contact last name"),
    "street": ("-a", "--street", "Contact street address"),
    "city": ("-c", "--city", "Contact city"),
    "state": ("-s", "--state", "Contact state"),
    "zip": ("-z", "--zip", "Contact zip code"),
    "phone": ("-t", "--telephone", "Phone numbers (separated by ','), optionally label:number"),
    "email": ("-e", "--email", "Email addresses (separated by ','), optionally label:address"),
    "pic": ("-p", "--pic", "Path to a contact photo"),
    "birthday": ("-b", "--birthday", "Contact birth day"),
    "birthmonth": ("-m", "--birthmonth", "Contact birth month"),
    "birthyear": (None, "--birthyear", "Contact birth year"),
    "company": (None, "--company", "Contact company"),
    "department": (None, "--department", "Contact department"),
    "title": (None, "--title", "Contact job title"),
    "middle": (None, "--middle", "Contact middle name"),
    "nickname": (None, "--nickname", "Contact nickname"),
    "country": (None, "--country", "Contact country"),
    "note": (None, "--note", "Contact note"),
}


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "-d",
        "--dir",
        type=Path,
        default=None,
        help="Write output to individual VCF files in directory DIR",
    )
    group.add_argument(
        "-t",
        "--text",
        dest="output_format",
        action="store_const",
        const=FORMAT_TEXT,
        help="Write output to stdout as text (default)",
    )
    group.add_argument(
        "-c",
        "--csv",
        dest="output_format",
        action="store_const",
        const=FORMAT_CSV,
        help="Write output to stdout in CSV format",
    )
    group.add_argument(
        "-v",
        "--vcf",
        dest="output_format",
        action="store_const",
        const=FORMAT_VCF,
        help="Write output to stdout in VCF format",
    )
    parser.set_defaults(output_format=FORMAT_TEXT)


def _add_contact_args(parser: argparse.ArgumentParser) -> None:
    for key, (short, long, help_text) in CONTACT_OPTIONS.items():
        flags = [f for f in (short, long) if f]
        parser.add_argument(*flags, dest=key, default=None, help=help_text)


def output_format(args: argparse.Namespace) -> str:
    """Selected format; a directory means one VCF file per contact."""
    if getattr(args, "dir", None) is not None:
        return FORMAT_FILE
    return args.output_format


def contact_props(args: argparse.Namespace) -> dict[str, str]:
    """Property map of the contact options that were given on the command line."""
    return {
        key: getattr(args, key)
        for key in CONTACT_OPTIONS
        if getattr(args, key, None) is not None
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="contactor",
        description="Contactor - manage contacts via the command line",
    )
    commands = parser.add_subparsers(dest="command", metavar="<command>", required=True)

    search = commands.add_parser("search", help="Search contacts")
    search.add_argument("filter", help="Name, identifier, or (with --deep) any text")
    search.add_argument(
        "--deep", action="store_true", help="Match the filter against every contact field"
    )
    _add_output_args(search)

    listing = commands.add_parser("list", help="List all contacts")
    _add_output_args(listing)

    exists = commands.add_parser("exists", help="Check if contact exists")
    exists.add_argument("filter")
    exists.add_argument("--deep", action="store_true")

    add = commands.add_parser("add", help="Add a contact")
    _add_contact_args(add)
    add.add_argument("-g", "--group", default="", help="Add the contact to group GROUP (created if missing)")

    update = commands.add_parser("update", help="Update a contact")
    update.add_argument("identifier")
    _add_contact_args(update)

    remove = commands.add_parser("remove", help="Remove a contact")
    remove.add_argument("identifier")

    commands.add_parser("groups", help="List groups")

    members = commands.add_parser("group-members", help="List the contacts of a group")
    members.add_argument("group_id")
    _add_output_args(members)

    group_remove = commands.add_parser(
        "group-remove", help="Remove a group and every contact in it"
    )
    group_remove.add_argument("group_id")
    return parser
