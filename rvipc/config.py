"""Static configuration of the capture and encode streams."""

from __future__ import annotations

import enum
from dataclasses import dataclass

MAX_STREAMS = 2
ENABLE_SUB_STREAM = True

ENABLE_OSD = True
ENABLE_PERF_MONITOR = True
ENABLE_SAVE_FILE = False


class VideoCodec(enum.IntEnum):
    """Video compression standard used by an encoder channel."""

    H264 = 0
    H265 = 1


@dataclass(frozen=True)
class VideoConfig:
    """Capture, encode and publishing settings of one stream."""

    vi_dev_id: int
    vi_pipe_id: int
    vi_chn_id: int
    venc_chn_id: int
    stream_id: int
    enable_rtsp: bool
    enable_rtmp: bool
    vi_entity_name: str
    width: int
    height: int
    fps: int
    bitrate: int
    gop: int
    codec: VideoCodec
    output_path: str
    rtsp_url: str
    rtmp_url: str

    @property
    def enabled(self) -> bool:
        """Whether the stream is published anywhere."""
        return self.enable_rtsp or self.enable_rtmp


_MAIN = VideoConfig(
    vi_dev_id=0,
    vi_pipe_id=0,
    vi_chn_id=0,
    venc_chn_id=0,
    stream_id=0,
    enable_rtsp=True,
    enable_rtmp=False,
    vi_entity_name="rkispp_scale0",
    width=1920,
    height=1080,
    fps=30,
    bitrate=4000000,
    gop=60,
    codec=VideoCodec.H264,
    output_path="/tmp/rv_demo.h264",
    rtsp_url="/live/0",
    rtmp_url="rtmp://your-server.com/live/stream_key",
)

_SUB = VideoConfig(
    vi_dev_id=_MAIN.vi_dev_id,
    vi_pipe_id=_MAIN.vi_pipe_id,
    vi_chn_id=_MAIN.vi_chn_id,
    venc_chn_id=1,
    stream_id=1,
    enable_rtsp=True,
    enable_rtmp=False,
    vi_entity_name=_MAIN.vi_entity_name,
    width=_MAIN.width,
    height=_MAIN.height,
    fps=_MAIN.fps,
    bitrate=_MAIN.bitrate,
    gop=_MAIN.gop,
    codec=VideoCodec.H264,
    output_path="/tmp/rv_demo_1.h264",
    rtsp_url="/live/1",
    rtmp_url="rtmp://your-server.com/live/stream_key_sub",
)


def main_stream_config() -> VideoConfig:
    """Return the configuration of the main stream."""
    return _MAIN


def sub_stream_config() -> VideoConfig:
    """Return the configuration of the sub stream."""
    return _SUB


def stream_configs() -> tuple[VideoConfig, ...]:
    """Return the configurations of every configured stream, main stream first."""
    if ENABLE_SUB_STREAM:
        return (_MAIN, _SUB)
    return (_MAIN,)