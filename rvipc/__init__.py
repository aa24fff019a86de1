"""Camera device support: sysfs/IIO/ADC access, frame queues, stream configuration, resource monitoring and system settings."""

__version__ = "1.0.0"