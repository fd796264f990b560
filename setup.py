from setuptools import setup, find_namespace_packages

setup(
    name="gateway_dns_endpoints",
    version="0.1.0",
    description="Geo and weighted DNS endpoints for gateway listeners",
    packages=find_namespace_packages(include=["indisoluble.*"]),
    python_requires=">=3.10",
    install_requires=["cryptography>=45.0.7,<46.0.0", "dnspython>=2.8.0,<3.0.0"],
    extras_require={"test": ["pytest"]},
    entry_points={
        "console_scripts": [
            "gateway-dns-endpoints = indisoluble.gateway_dns_endpoints.main:main"
        ]
    },
)
