"""Version information for the bitstream loader."""

__version__ = "1.0.0"
__title__ = "load-bitstream"
__description__ = "Program an FPGA bitstream via Vivado and hot-reset the PCI device"
