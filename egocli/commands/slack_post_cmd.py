"""
ego slack-post  ──  post a message to Slack channels
"""
from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from ..utils.logging import colorize, spinner, warn

NAME = "slack-post"
DESCRIPTION = "Posts a message to one or more Slack channels."
SYNTAX = "MESSAGE [options]"
EXAMPLES = ['ego slack-post "Hello, ego" --channels=ABCDEFGHI,JKLMNOPQR']


def add_arguments(parser):
    parser.add_argument("message", nargs="?", default="", metavar="MESSAGE",
                        help="The text to post")
    parser.add_argument("-c", "--channels", default="", metavar="CH,...",
                        help="One or more channels to post to, separated by commas")
    parser.add_argument("-t", "--token", default="", metavar="TOKEN",
                        help="Custom token of the (bot) user for the Slack Web API")
    parser.epilog = (parser.epilog or "") + (
        "\n\nConfig:\n slack_token  The token of the (bot) user for the Slack Web API."
    )


def parse_channels(value: str) -> list[str]:
    return [c.strip() for c in (value or "").split(",") if c.strip()]


def execute(ctx):
    message = ctx.args.message.strip()
    if not message:
        warn("Please define a message!")
        ctx.exit(1)

    token = ctx.args.token.strip() or str(ctx.get("slack_token") or "").strip()
    if not token:
        hint = colorize('ego set slack_token "<MY-SLACK-TOKEN>"')
        warn(f"Please setup {colorize('slack_token')} config value, by executing {hint}")
        ctx.exit(2)

    client = WebClient(token=token)
    for channel in parse_channels(ctx.args.channels):
        with spinner(f"Posting message to Slack channel '{channel}' ...") as sp:
            try:
                client.chat_postMessage(channel=channel, text=message)
                sp.text = f"Posted message to Slack channel '{channel}'"
            except SlackApiError as e:
                sp.fail(f"Posting message to Slack '{channel}' failed: '{e.response.get('error', e)}'")
