#!/usr/bin/env python3
"""Basic usage example for emojistego.

Demonstrates hiding a message behind an emoji, reading it back, and packing
several messages into one string.
"""

from emojistego import (
    VariationSelectorCodec,
    ZWJCodec,
    get_compression_stats,
)


def main() -> None:
    codec = VariationSelectorCodec(compress=True)

    # --- Encode text → emoji ---
    secret = "Hello, World!"
    print(f"Original message: {secret}")

    hidden = codec.encode("😊", secret)
    print(f"\nEncoded text: {hidden}")
    print(f"Code points:  {len(hidden)} (visible: {codec.visual_length(hidden)})")

    # --- Decode emoji → text ---
    recovered = codec.decode(hidden)
    print(f"\nRecovered: {recovered}")
    assert recovered == secret, "Round-trip failed!"
    print("Round-trip successful!")

    # --- Several messages in one string ---
    print("\n--- Multiple messages ---")
    packed = codec.encode_multiple({"🔑": "key", "🌟": "star", "🎯": "target"})
    for msg in codec.decode_all(packed):
        print(f"{msg.base_character}: {msg.message}")
    print(f"Visible: {codec.get_visible_text(packed)}")

    # --- Copy/paste resistant scheme ---
    print("\n--- ZWJ scheme ---")
    safe = ZWJCodec()
    safe_text = safe.encode("A", "hi")
    print(f"Code points: {len(safe_text)}")
    print(f"Decoded:     {safe.decode(safe_text)}")

    # --- Diagnostics ---
    print("\n--- Compression stats ---")
    stats = get_compression_stats("repeat " * 20)
    print(f"Original size:   {stats.original_size} bytes")
    print(f"Compressed size: {stats.compressed_size} bytes")
    print(f"Ratio:           {stats.compression_ratio:.2f}")
    print(f"Worth it:        {stats.beneficial}")

    summary = codec.stats(packed)
    print("\n--- Text stats ---")
    print(f"Hidden bytes:  {summary.hidden_bytes}")
    print(f"Message count: {summary.message_count}")


if __name__ == "__main__":
    main()
