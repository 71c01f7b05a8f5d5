"""
Package: slack_send
Description: Send data into Slack from a GitHub Actions workflow.

Content is posted either by calling a Web API method with a token or by
posting to a webhook.
"""

__version__ = "2.1.0"
