"""Assembly - ffmpeg muxing and the merge stage."""

from .ffmpeg import FFmpegMuxer, build_merge_cmd, build_concat_cmd
from .merge import MergeStage

__all__ = ["FFmpegMuxer", "build_merge_cmd", "build_concat_cmd", "MergeStage"]
