from bitarray import bitarray

from padbits import BitSequence, BitView


class BitSequenceInitialization:
    params = [[100, 1000, 10000]]
    param_names = ['size']

    def setup(self, size):
        self.bool_list = [i % 2 == 0 for i in range(size)]
        self.string = "".join(str(int(value)) for value in self.bool_list)

    def time_bitsequence_list_bool(self, size):
        BitSequence.from_bool_slice(self.bool_list)

    def time_bitarray_list_bool(self, size):
        bitarray(self.bool_list)

    def time_bitsequence_string(self, size):
        BitSequence(self.string)

    def time_bitarray_string(self, size):
        bitarray(self.string)


class BitSequenceAppend:
    params = [[100, 1000, 10000]]
    param_names = ['size']

    def time_bitsequence_append_bit(self, size):
        bits = BitSequence()
        for i in range(size):
            bits.append_bit(i % 3 == 0)

    def time_bitarray_append(self, size):
        bits = bitarray()
        for i in range(size):
            bits.append(i % 3 == 0)


class BitSequenceExtend:
    params = [[100, 1000, 10000, 100000], [0, 3]]
    param_names = ['size', 'offset']

    def setup(self, size, offset):
        self.head = [True] * offset
        self.tail = BitSequence([i % 2 == 0 for i in range(size)])
        self.ba_tail = bitarray([i % 2 == 0 for i in range(size)])

    def time_bitsequence_extend(self, size, offset):
        bits = BitSequence(self.head)
        with self.tail.as_bit_view() as view:
            bits.extend_from_bits(view)

    def time_bitarray_extend(self, size, offset):
        bits = bitarray(self.head)
        bits.extend(self.ba_tail)


class BitSequenceIteration:
    params = [[100, 1000, 10000]]
    param_names = ['size']

    def setup(self, size):
        self.bits = BitSequence([False] * size)
        self.ba = bitarray([False] * size)

    def time_bitsequence_iter(self, size):
        for bit in self.bits:
            pass

    def time_bitsequence_to_bool_slice(self, size):
        self.bits.to_bool_slice()

    def time_bitarray_iter(self, size):
        for bit in self.ba:
            pass

    def time_bitarray_tolist(self, size):
        self.ba.tolist()


class BitSequenceSerialization:
    params = [[100, 1000, 10000, 100000]]
    param_names = ['size']

    def setup(self, size):
        self.bits = BitSequence([i % 5 == 0 for i in range(size)])
        self.frame = bytes(self.bits.serialize())
        self.ba = bitarray([i % 5 == 0 for i in range(size)])
        self.ba_bytes = self.ba.tobytes()

    def time_bitsequence_serialize(self, size):
        self.bits.serialize()

    def time_bitsequence_deserialize(self, size):
        BitSequence.deserialize(self.frame)

    def time_bitview_deserialize(self, size):
        BitView.deserialize(self.frame)

    def time_bitarray_tobytes(self, size):
        self.ba.tobytes()

    def time_bitarray_frombytes(self, size):
        bitarray().frombytes(self.ba_bytes)
