import argparse
import logging
import sys

from bignum import BigNum, add, one, power_mod
from hexcodec import from_hex_string, to_hex_string

logger = logging.getLogger(__name__)

# Smallest key the cryptography package will generate
MIN_KEY_SIZE = 1024


def generate_rsa_keypair(key_size=1024):
    """
    Generate RSA keypair (p, q, n, e, d) with a specified key size.
    :param key_size: Key size in bits. The cryptography package accepts 1024 and up.
    :return: Tuple (p, q, n, e, d) where:
             - p, q: Prime numbers
             - n: Modulus (p * q)
             - e: Public exponent
             - d: Private exponent
    """
    from cryptography.hazmat.primitives.asymmetric import rsa

    private_key = rsa.generate_private_key(
        public_exponent=65537,  # Commonly used public exponent
        key_size=key_size,
    )

    private_numbers = private_key.private_numbers()
    public_numbers = private_key.public_key().public_numbers()

    p = private_numbers.p
    q = private_numbers.q
    n = public_numbers.n
    e = public_numbers.e
    d = private_numbers.d

    return p, q, n, e, d


class BigNumRSA:
    """Textbook RSA on top of BigNum.power_mod, one message at a time."""

    def _prepare_data(self, data):
        """Convert Python integers into BigNums."""
        return [value if isinstance(value, BigNum) else BigNum(value) for value in data]

    def _combine_chunks(self, data):
        """Convert BigNums back into Python integers."""
        return [int(value) for value in data]

    def encrypt(self, messages, exponent, modulus):
        """
        Compute C = M^e mod n for every message.
        :param messages: List of integers (or BigNums), each less than `modulus`
        :param exponent: Public exponent
        :param modulus: RSA modulus
        :return: List of integers
        """
        exponent_bn, modulus_bn = self._prepare_data([exponent, modulus])
        results = []
        for message in self._prepare_data(messages):
            results.append(power_mod(message, exponent_bn, modulus_bn).unwrap())
        return self._combine_chunks(results)

    def decrypt(self, ciphertexts, private_exponent, modulus):
        # RSA decryption is encryption with the private exponent
        return self.encrypt(ciphertexts, private_exponent, modulus)


def demo_addition():
    n1 = one()
    n2 = one()
    result = add(n1, n2)
    print(f"  {to_hex_string(n1)}")
    print(f"+ {to_hex_string(n2)}")
    print("----------")
    print(f"= {to_hex_string(result)}")


def demo_keypair():
    """
    Fixed multi-block key built from the Mersenne primes 2^61 - 1 and 2^31 - 1.
    Small enough that a round trip on the pure Python engine takes well under
    a second.
    :return: Tuple (p, q, n, e, d) as for generate_rsa_keypair
    """
    p = 2 ** 61 - 1
    q = 2 ** 31 - 1
    e = 65537
    d = pow(e, -1, (p - 1) * (q - 1))
    return p, q, p * q, e, d


def check_message(message, key_size=None):
    """
    Return an error string if `message` cannot be encrypted with the key that
    `key_size` selects, else None. Runs before any key is generated.
    """
    if key_size is None:
        _, _, n, _, _ = demo_keypair()
        if int(message) >= n:
            return f"message {message!r} must be less than the demo modulus {n:#x}"
    elif message.bit_length() >= key_size:
        # A key_size-bit modulus is at least 2^(key_size - 1)
        return f"message {message!r} must have fewer than {key_size} bits"
    return None


def demo_rsa(message, key_size=None):
    if key_size is None:
        p, q, n, e, d = demo_keypair()
    else:
        logger.info("Generating a %d-bit RSA key", key_size)
        p, q, n, e, d = generate_rsa_keypair(key_size)
    print(f"n (modulus): {n:#x}")
    print(f"e (public exponent): {e}")

    logger.info("Running RSA round trip with a %d-bit modulus", n.bit_length())
    rsa = BigNumRSA()
    ciphertexts = rsa.encrypt([message], e, n)
    print("Ciphertexts:", [hex(c) for c in ciphertexts])

    logger.info("Decrypting with a %d-bit private exponent", d.bit_length())
    decrypted_messages = rsa.decrypt(ciphertexts, d, n)
    print("Decrypted messages:", [hex(m) for m in decrypted_messages])

    if decrypted_messages == [int(message)]:
        print("Success: Decrypted message matches original message.")
        return True
    print("Failure: Decrypted message does not match original message.")
    return False


def build_parser():
    parser = argparse.ArgumentParser(description="Demonstrate the BigNum arithmetic engine.")
    parser.add_argument(
        "--key-size",
        type=int,
        default=None,
        help="Generate a fresh RSA key of this many bits (at least 1024). "
        "The engine is pure Python: a 1024-bit round trip takes several minutes. "
        "Without this option a fixed 92-bit demo key is used.",
    )
    parser.add_argument("--message", default="01234567 89ABCDEF", help="Plaintext as hex, spaces allowed")
    parser.add_argument("--skip-rsa", action="store_true", help="Only run the addition demo")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def parse_args(argv=None):
    return build_parser().parse_args(argv)


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.key_size is not None and args.key_size < MIN_KEY_SIZE:
        parser.error(f"--key-size must be at least {MIN_KEY_SIZE}")

    message = None
    if not args.skip_rsa:
        parsed = from_hex_string(args.message)
        if not parsed.ok:
            parser.error(f"--message: {parsed.message}")
        message = parsed.value
        error = check_message(message, args.key_size)
        if error:
            parser.error(f"--message: {error}")

    demo_addition()
    if message is not None and not demo_rsa(message, args.key_size):
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
