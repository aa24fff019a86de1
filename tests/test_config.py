import dataclasses

import pytest

from rvipc.config import (
    MAX_STREAMS,
    VideoCodec,
    main_stream_config,
    stream_configs,
    sub_stream_config,
)


def test_main_stream_values():
    cfg = main_stream_config()
    assert cfg.width == 1920
    assert cfg.height == 1080
    assert cfg.fps == 30
    assert cfg.bitrate == 4000000
    assert cfg.gop == 60
    assert cfg.codec is VideoCodec.H264
    assert cfg.rtsp_url == "/live/0"
    assert cfg.vi_entity_name == "rkispp_scale0"


def test_main_stream_publishing():
    cfg = main_stream_config()
    assert cfg.enable_rtsp is True
    assert cfg.enable_rtmp is False
    assert cfg.enabled is True


def test_sub_stream_channels():
    cfg = sub_stream_config()
    assert cfg.venc_chn_id == 1
    assert cfg.stream_id == 1
    assert cfg.rtsp_url == "/live/1"
    assert cfg.output_path == "/tmp/rv_demo_1.h264"


def test_sub_stream_follows_main_capture():
    main, sub = main_stream_config(), sub_stream_config()
    assert (sub.width, sub.height, sub.fps, sub.bitrate, sub.gop) == (
        main.width,
        main.height,
        main.fps,
        main.bitrate,
        main.gop,
    )
    assert (sub.vi_dev_id, sub.vi_pipe_id, sub.vi_chn_id) == (
        main.vi_dev_id,
        main.vi_pipe_id,
        main.vi_chn_id,
    )


def test_stream_configs_order_and_limit():
    configs = stream_configs()
    assert configs[0] is main_stream_config()
    assert configs[1] is sub_stream_config()
    assert len(configs) <= MAX_STREAMS
    assert len({c.venc_chn_id for c in configs}) == len(configs)


def test_config_is_frozen():
    with pytest.raises(dataclasses.FrozenInstanceError):
        main_stream_config().width = 640


def test_configured_codec_values():
    assert int(main_stream_config().codec) == 0
    assert int(sub_stream_config().codec) == 0