from __future__ import annotations

from enum import IntEnum


class SoundId(IntEnum):
    """Sound effects addressed by the game, in file order."""

    DUKE_NORMAL_SHOT = 0
    DUKE_LASER_SHOT = 1
    DUKE_JUMPING = 2
    DUKE_LANDING = 3
    DUKE_ATTACH_CLIMBABLE = 4
    DUKE_PAIN = 5
    DUKE_DEATH = 6
    ENEMY_HIT = 7
    BIG_EXPLOSION = 8
    EXPLOSION = 9
    ALTERNATE_EXPLOSION = 10
    ITEM_PICKUP = 11
    WEAPON_PICKUP = 12
    HEALTH_PICKUP = 13
    LETTER_COLLECTED = 14
    FORCE_FIELD_FIZZLE = 15
    SWOOSH = 16
    FALLING_ROCK = 17
    GLASS_BREAKING = 18
    BLUE_KEY_DOOR_OPENED = 19
    DOOR_OPENED = 20
    ELEVATOR_MOVING = 21
    TELEPORT = 22
    MENU_SELECT = 23
    WATER_DROP = 24
    FLAMETHROWER_SHOT = 25
    ROCKET_LAUNCHER_SHOT = 26
    ENEMY_LASER_SHOT = 27
    SPIDER_ATTACHED = 28
    HAMMER_SMASH = 29
    DUKE_JETPACK = 30
    LAVA_FOUNTAIN = 31
    SLIME_BLOB_BURST = 32
    RADAR_BLIP = 33
    INTRO_GUN_SHOT = 34
    INTRO_GUN_SHOT_LOW = 35
    INTRO_EMPTY_SHELLS_FALLING = 36
    INTRO_TARGET_MOVING_CLOSER = 37
    INTRO_TARGET_STOPS_MOVING = 38
    INTRO_DUKE_SPEAKS_1 = 39
    INTRO_DUKE_SPEAKS_2 = 40


# Sounds of the intro sequence live in dedicated VOC files.
INTRO_SOUND_FILES: dict[SoundId, str] = {
    SoundId.INTRO_GUN_SHOT: "INTRO3.MNI",
    SoundId.INTRO_GUN_SHOT_LOW: "INTRO4.MNI",
    SoundId.INTRO_EMPTY_SHELLS_FALLING: "INTRO5.MNI",
    SoundId.INTRO_TARGET_MOVING_CLOSER: "INTRO6.MNI",
    SoundId.INTRO_TARGET_STOPS_MOVING: "INTRO7.MNI",
    SoundId.INTRO_DUKE_SPEAKS_1: "INTRO8.MNI",
    SoundId.INTRO_DUKE_SPEAKS_2: "INTRO9.MNI",
}


def intro_sound_filename(sound_id: SoundId) -> str | None:
    return INTRO_SOUND_FILES.get(sound_id)


def digitized_sound_filename(sound_id: SoundId) -> str:
    """Name of the optional Sound Blaster sample for `sound_id` (1-based)."""

    return f"SB_{int(sound_id) + 1}.MNI"
