import threading

from totp_core.generator import GeneratorCache, GeneratorConfig, TotpGenerator


def test_generator_codes(rfc_secret):
    generator = TotpGenerator(rfc_secret, 8, 30)
    assert generator.code(59) == "94287082"
    assert generator.remaining(59) == 1
    assert generator.hotp(0) == "84755224"


def test_generator_defaults_to_wall_clock(rfc_secret):
    generator = TotpGenerator(rfc_secret)
    assert len(generator.code()) == 6
    assert 0 < generator.remaining() <= 30


def test_repr_hides_key(rfc_secret):
    text = repr(TotpGenerator(rfc_secret, 6, 30))
    assert rfc_secret not in text
    assert "12345678901234567890" not in text


def test_config_equality_is_verbatim():
    assert GeneratorConfig("ABCDEFGH", 6, 30) == GeneratorConfig("ABCDEFGH", 6, 30)
    assert GeneratorConfig("ABCDEFGH", 6, 30) != GeneratorConfig("ABCD EFGH", 6, 30)
    assert GeneratorConfig("ABCDEFGH", 6, 30) != GeneratorConfig("ABCDEFGH", 8, 30)
    assert GeneratorConfig("ABCDEFGH", 6, 30) != GeneratorConfig("ABCDEFGH", 6, 60)


def test_cache_reuses_instance(cache, rfc_secret):
    config = GeneratorConfig(rfc_secret, 6, 30)
    first = cache.get_or_create(config)
    assert cache.get_or_create(GeneratorConfig(rfc_secret, 6, 30)) is first
    assert config in cache
    assert len(cache) == 1


def test_cache_keys_differ_by_raw_text(cache):
    a = cache.get_or_create(GeneratorConfig("JBSWY3DPEHPK3PXP", 6, 30))
    b = cache.get_or_create(GeneratorConfig("JBSW Y3DP EHPK 3PXP", 6, 30))
    assert a is not b
    assert len(cache) == 2
    # same key material though
    assert a.code(1000) == b.code(1000)


def test_concurrent_first_use_yields_one_canonical_instance(rfc_secret):
    built = []
    barrier = threading.Barrier(8)

    def factory(secret, digits, period):
        generator = TotpGenerator(secret, digits, period)
        built.append(generator)
        return generator

    cache = GeneratorCache(factory=factory)
    config = GeneratorConfig(rfc_secret, 6, 30)
    results = []

    def worker():
        barrier.wait()
        results.append(cache.get_or_create(config))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert len({id(r) for r in results}) == 1
    assert results[0] in built
    assert cache.get_or_create(config) is results[0]
    assert len(cache) == 1

