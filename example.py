import sys

from wav_mixer import MixConfig, TrackFX, mix_wav_files


def test_mix():
    print("Test mix:")
    session = mix_wav_files(
        ["data/drums.wav", "data/bass.wav"],
        "data/mix.wav",
        config=MixConfig(bit_depth=24, attenuate=True),
        fx=[TrackFX(), TrackFX.from_db(-3)],
    )
    print(f"mix peak: {session.mix_stats.peak_db:.2f}dB, rms: {session.mix_stats.rms_db:.2f}dB")


def test_mix_without_writing():
    print("Test mix without writing:")
    session = mix_wav_files(sys.argv[1:], None)
    for track, stats in zip(session.tracks, session.track_stats):
        print(f"{track.decoder}: {stats.clipped_count} clipped samples")


if __name__ == "__main__":
    test_mix()
    #test_mix_without_writing()
