"""Script for end-to-end testing the Session against blip.tv."""

import logging
import os

from dotenv import load_dotenv

from bliptv import Session

if __name__ == "__main__":  # pragma: no cover
    load_dotenv()
    logging.basicConfig(level=logging.INFO)

    session = Session(
        {
            "username": os.environ["BLIPTV_USERNAME"],
            "password": os.environ["BLIPTV_PASSWORD"],
        }
    )

    for video in session.all_videos_from_login():
        print(f"{video.id}: {video.title} [{video.tags_string}]")  # noqa: T201
