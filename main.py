import argparse
import logging
import random
import sys

from playlist_builder.core import (
    PlaylistBuilderError,
    SpotifyCredentialsMissing,
    configure_logging,
    log_error,
    log_info,
)
from playlist_builder.pipeline import add_random_tracks
from playlist_builder.spotify import load_credentials_from_env


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Add a random selection of your library tracks to a Spotify playlist."
    )
    parser.add_argument(
        "playlist",
        help="Target playlist: ID, spotify:playlist: URI or open.spotify.com URL.",
    )
    parser.add_argument(
        "--user",
        required=True,
        help="Your Spotify user ID or spotify:user: URI (must own the playlist).",
    )
    parser.add_argument(
        "--tracks",
        type=int,
        default=None,
        help="Number of tracks to add (default: 500).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed, for a reproducible selection.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug details.",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        credentials = load_credentials_from_env()
    except SpotifyCredentialsMissing as e:
        log_error(str(e))
        log_error(
            "Please set SPOTIFY_AUTHORIZATION and SPOTIFY_CLIENT_TOKEN in the .env file."
        )
        return 2

    try:
        result = add_random_tracks(
            credentials,
            args.playlist,
            args.user,
            args.tracks,
            rng=random.Random(args.seed),
        )
    except PlaylistBuilderError:
        # already logged by add_random_tracks
        return 1

    log_info(
        f"Requested {result.requested}, added {result.added}, missed {result.missed} "
        f"({result.albums_found} albums, {result.playlists_found} playlists in the library)"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
