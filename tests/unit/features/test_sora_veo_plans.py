from __future__ import annotations

import pytest

from src.kie_studio.errors import ValidationError
from src.kie_studio.features.sora import (
    SoraCharactersController,
    SoraCharactersRequest,
    SoraMode,
    SoraStoryboardController,
    SoraStoryboardRequest,
    SoraVideoController,
    SoraVideoRequest,
    SoraWatermarkRemoverController,
    SoraWatermarkRemoverRequest,
    validate_storyboard,
)
from src.kie_studio.features.veo import VeoController, VeoRequest
from src.kie_studio.providers.providers_sora import StoryboardShot
from src.kie_studio.providers.providers_veo import VeoGenerationType, VeoModel


def urls_for(plan) -> dict[str, list[str]]:
    return {
        group.key: [f"https://files.test/{asset.filename}" for asset in group.assets]
        for group in plan.uploads
    }


# Sora 2 video


@pytest.mark.parametrize(
    ("mode", "adapter", "size"),
    [
        (SoraMode.TEXT_TO_VIDEO, "sora2_pro_t2v", "high"),
        (SoraMode.TEXT_TO_VIDEO_STANDARD, "sora2_t2v", "standard"),
    ],
)
def test_sora_text_modes(services, mode, adapter, size) -> None:
    plan = SoraVideoController(services).plan(SoraVideoRequest(prompt="p", mode=mode))

    assert plan.adapter_name == adapter
    assert plan.build_input({}).to_input()["size"] == size


def test_sora_image_to_video_plan(services, make_asset) -> None:
    plan = SoraVideoController(services).plan(
        SoraVideoRequest(
            prompt="p",
            mode=SoraMode.IMAGE_TO_VIDEO_STANDARD,
            image=(make_asset("s.png"),),
            aspect_ratio="portrait",
            n_frames="15",
        )
    )

    assert plan.adapter_name == "sora2_i2v"
    assert plan.uploads[0].upload_path == "sora2-input-image"
    body = plan.build_input(urls_for(plan)).to_input()
    assert body["image_urls"] == ["https://files.test/s.png"]
    assert body["aspect_ratio"] == "portrait"
    assert body["n_frames"] == "15"


def test_sora_high_size_requires_pro(services) -> None:
    with pytest.raises(ValidationError, match="only available for Sora 2 Pro"):
        SoraVideoController(services).plan(
            SoraVideoRequest(prompt="p", mode=SoraMode.TEXT_TO_VIDEO_STANDARD, size="high")
        )


def test_sora_text_to_video_rejects_image(services, make_asset) -> None:
    with pytest.raises(ValidationError, match="does not accept an input image"):
        SoraVideoController(services).plan(SoraVideoRequest(prompt="p", image=(make_asset(),)))


def test_sora_image_to_video_requires_image(services) -> None:
    with pytest.raises(ValidationError, match="Please provide at least one image"):
        SoraVideoController(services).plan(
            SoraVideoRequest(prompt="p", mode=SoraMode.IMAGE_TO_VIDEO)
        )


def test_sora_prompt_limit(services) -> None:
    with pytest.raises(ValidationError, match="between 1 and 10000"):
        SoraVideoController(services).plan(SoraVideoRequest(prompt="x" * 10001))


# Watermark remover


def test_watermark_remover_accepts_share_url(services) -> None:
    url = "https://sora.chatgpt.com/p/s_abc"

    plan = SoraWatermarkRemoverController(services).plan(SoraWatermarkRemoverRequest(video_url=f" {url} "))

    assert plan.adapter_name == "sora2_watermark_remover"
    assert plan.build_input({}).to_input() == {"video_url": url}


@pytest.mark.parametrize(
    "url",
    ["", "https://example.com/video", "https://sora.chatgpt.com/" + "x" * 500],
)
def test_watermark_remover_rejects_bad_urls(services, url) -> None:
    with pytest.raises(ValidationError):
        SoraWatermarkRemoverController(services).plan(SoraWatermarkRemoverRequest(video_url=url))


# Characters


def test_characters_need_one_video(services, make_asset) -> None:
    controller = SoraCharactersController(services)

    with pytest.raises(ValidationError, match="Please provide at least one video"):
        controller.plan(SoraCharactersRequest())
    with pytest.raises(ValidationError, match="Only video files"):
        controller.plan(SoraCharactersRequest(video=(make_asset("still.png"),)))


def test_characters_keep_optional_text(services, make_asset) -> None:
    plan = SoraCharactersController(services).plan(
        SoraCharactersRequest(
            video=(make_asset("c.mp4"),),
            character_prompt=" friendly robot ",
            safety_instruction="no violence",
        )
    )

    body = plan.build_input(urls_for(plan)).to_input()
    assert body == {
        "character_file_url": ["https://files.test/c.mp4"],
        "character_prompt": "friendly robot",
        "safety_instruction": "no violence",
    }


# Storyboard


def test_storyboard_durations_must_match_length() -> None:
    validate_storyboard((StoryboardShot("a", 7.5), StoryboardShot("b", 7.5)), "15")

    with pytest.raises(ValidationError, match="add up to 14s but the video is 15s"):
        validate_storyboard((StoryboardShot("a", 7), StoryboardShot("b", 7)), "15")


@pytest.mark.parametrize(
    ("shots", "message"),
    [
        ((), "at least one shot"),
        ((StoryboardShot("  ", 10),), "Shot 1 needs a scene"),
        ((StoryboardShot("a", 10), StoryboardShot("b", 0)), "Shot 2 duration"),
        ((StoryboardShot("x" * 5001, 10),), "exceeds 5000"),
    ],
)
def test_storyboard_shot_errors(shots, message) -> None:
    with pytest.raises(ValidationError, match=message):
        validate_storyboard(shots, "10")


def test_storyboard_plan(services, make_asset) -> None:
    shots = (
        StoryboardShot("kitten eats cake", 10),
        StoryboardShot("kitten naps", 10),
        StoryboardShot("kitten wakes", 5),
    )

    plan = SoraStoryboardController(services).plan(
        SoraStoryboardRequest(shots=shots, n_frames="25", image=(make_asset("cover.png"),))
    )

    assert plan.adapter_name == "sora2_pro_storyboard"
    assert plan.uploads[0].upload_path == "sora2-storyboard-image"
    body = plan.build_input(urls_for(plan)).to_input()
    assert body["n_frames"] == "25"
    assert body["image_urls"] == ["https://files.test/cover.png"]
    assert len(body["shots"]) == 3


def test_storyboard_rejects_unknown_length(services) -> None:
    with pytest.raises(ValidationError, match="n_frames"):
        SoraStoryboardController(services).plan(
            SoraStoryboardRequest(shots=(StoryboardShot("a", 20),), n_frames="20")
        )


# Veo 3.1


def test_veo_text_plan(services) -> None:
    plan = VeoController(services).plan(VeoRequest(prompt="p", seed=12345, watermark="  "))

    assert plan.adapter_name == "veo31"
    body = plan.build_input({}).to_input()
    assert body["seeds"] == 12345
    assert body["watermark"] is None
    assert body["imageUrls"] is None
    assert body["model"] == "veo3_fast"


def test_veo_text_rejects_images(services, make_asset) -> None:
    with pytest.raises(ValidationError, match="does not accept reference images"):
        VeoController(services).plan(VeoRequest(prompt="p", images=(make_asset(),)))


def test_veo_first_and_last_frames(services, make_asset) -> None:
    controller = VeoController(services)
    request = VeoRequest(
        prompt="p",
        model=VeoModel.QUALITY,
        generation_type=VeoGenerationType.FIRST_AND_LAST_FRAMES_2_VIDEO,
        images=(make_asset("first.png"), make_asset("last.png")),
        aspect_ratio="9:16",
    )

    plan = controller.plan(request)

    assert plan.uploads[0].upload_path == "veo31-input-images"
    assert plan.build_input(urls_for(plan)).to_input()["imageUrls"] == [
        "https://files.test/first.png",
        "https://files.test/last.png",
    ]
    with pytest.raises(ValidationError, match="At most 2"):
        controller.plan(
            VeoRequest(
                prompt="p",
                generation_type=VeoGenerationType.FIRST_AND_LAST_FRAMES_2_VIDEO,
                images=tuple(make_asset(f"{i}.png") for i in range(3)),
            )
        )


@pytest.mark.parametrize(
    ("model", "aspect_ratio"),
    [(VeoModel.QUALITY, "16:9"), (VeoModel.FAST, "9:16"), (VeoModel.FAST, "Auto")],
)
def test_veo_reference_restrictions(services, make_asset, model, aspect_ratio) -> None:
    with pytest.raises(ValidationError, match="veo3_fast model at 16:9"):
        VeoController(services).plan(
            VeoRequest(
                prompt="p",
                model=model,
                aspect_ratio=aspect_ratio,
                generation_type=VeoGenerationType.REFERENCE_2_VIDEO,
                images=(make_asset(),),
            )
        )


def test_veo_reference_allows_three_images(services, make_asset) -> None:
    plan = VeoController(services).plan(
        VeoRequest(
            prompt="p",
            generation_type=VeoGenerationType.REFERENCE_2_VIDEO,
            images=tuple(make_asset(f"{i}.png") for i in range(3)),
        )
    )

    assert len(plan.uploads[0].assets) == 3


@pytest.mark.parametrize("seed", [9999, 100000])
def test_veo_seed_range(services, seed) -> None:
    with pytest.raises(ValidationError, match="Seed must be between 10000 and 99999"):
        VeoController(services).plan(VeoRequest(prompt="p", seed=seed))
